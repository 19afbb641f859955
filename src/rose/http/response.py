"""HTTP response value folded into ``state["http"]["response"]``.

Each transformation returns a new Response.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response: body, status, and headers."""

    body: str | bytes = ""
    status: int = 200
    headers: Mapping[str, str] = field(default_factory=dict)

    # -- Chainable transformations --

    def with_status(self, status: int) -> "Response":
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> "Response":
        """Return a new Response with *name* set to *value*."""
        return replace(self, headers={**self.headers, name: value})

    # -- Accessors --

    @property
    def content_type(self) -> str | None:
        """The Content-Type header, looked up case-insensitively."""
        for name, value in self.headers.items():
            if name.lower() == "content-type":
                return value
        return None

    @property
    def body_bytes(self) -> bytes:
        """Body encoded to bytes."""
        if isinstance(self.body, bytes):
            return self.body
        return self.body.encode("utf-8")

    @property
    def text(self) -> str:
        """Body decoded to str."""
        if isinstance(self.body, str):
            return self.body
        return self.body.decode("utf-8")
