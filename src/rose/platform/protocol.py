"""PlatformAdapter protocol.

Each transport backend is a concrete class selected when the App is
constructed::

    app = App(platform=ASGIPlatform(debug=True))
"""

from typing import Protocol, runtime_checkable

from rose.bus import EventBus


@runtime_checkable
class PlatformAdapter(Protocol):
    """What an App needs from a transport backend.

    ``init`` runs once, from ``App.__init__``: subscribe the transport's
    ``http.request`` normalization handler and the response handlers.

    ``serve`` binds a listener. For each request it must dispatch
    ``http.request`` with the raw request, then read
    ``state["http"]["response"]``: serialize it if set, answer 404 if it
    is ``None`` or missing. Concurrent requests into one bus must be
    serialized by the adapter.
    """

    def init(self, bus: EventBus) -> None: ...

    def serve(self, bus: EventBus, *, host: str, port: int) -> None: ...
