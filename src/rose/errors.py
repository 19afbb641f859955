"""Rose exception hierarchy.

Shared across the bus, router, app, and platform adapters so every
module raises and catches the same types.
"""


class RoseError(Exception):
    """Base for all rose-specific errors."""


class ConfigurationError(RoseError):
    """Raised when app configuration or route registration is invalid."""


class CyclicDispatchError(RoseError):
    """Chained dispatch instructions went deeper than the allowed maximum.

    Almost always a cycle: event A's handler dispatches B, and B's
    handler dispatches A again.  Raised instead of letting the recursion
    exhaust the interpreter stack.
    """

    def __init__(self, event: str, depth: int) -> None:
        super().__init__(
            f"Dispatch of {event!r} exceeded the maximum chain depth "
            f"({depth}). Check for handlers that dispatch each other in a cycle."
        )
        self.event = event
        self.depth = depth


class RequestTooLarge(RoseError):
    """A request body exceeded ``AppConfig.max_content_length``.

    Raised by platform adapters while buffering, before any dispatch.
    """

    def __init__(self, limit: int) -> None:
        super().__init__(f"Request body exceeds {limit} bytes")
        self.limit = limit


class ClientDisconnected(RoseError):
    """The client went away before its request body was complete."""
