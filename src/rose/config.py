"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass

from rose.bus import check_max_depth
from rose.errors import ConfigurationError

SHADOW_POLICIES = frozenset({"warn", "error", "ignore"})


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, port=3222)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 3000
    debug: bool = False
    workers: int = 1
    log_level: str = "info"

    # Dispatch
    max_dispatch_depth: int = 64

    # Routing — what to do when a new route can never be reached because
    # an earlier one already matches everything it would
    route_shadowing: str = "warn"

    # Limits
    max_content_length: int = 16 * 1024 * 1024  # 16 MB

    # Fallback body for requests that no route answered
    not_found_body: str = "Not found."

    def __post_init__(self) -> None:
        check_max_depth(self.max_dispatch_depth)
        if self.route_shadowing not in SHADOW_POLICIES:
            allowed = ", ".join(sorted(SHADOW_POLICIES))
            msg = f"route_shadowing must be one of {allowed}; got {self.route_shadowing!r}"
            raise ConfigurationError(msg)
