"""Rose application class.

Owns one event bus and one route table. Mutable during setup (routes,
subscriptions); the route table is frozen once the app starts serving.
"""

import threading
from collections.abc import Callable
from typing import Any

from rose._internal.types import ASGIApp, EventHandler, Receive, Scope, Send
from rose.bus import EventBus
from rose.config import AppConfig
from rose.errors import ConfigurationError
from rose.pipeline import ROUTE_EVENT, make_route_handler
from rose.platform.asgi import ASGIPlatform
from rose.platform.protocol import PlatformAdapter
from rose.routing.route import Route
from rose.routing.router import Router
from rose.state import State


class App:
    """The rose application.

    Usage::

        app = App(state={"name": None})

        app.get("/hello/:who", "http.request.hello")

        @app.on("http.request.hello")
        def hello(state, params):
            return Result(
                {**state, "name": params["who"]},
                Dispatch("http.response.plain", {"body": f"Hello: {params['who']}"}),
            )

        app.serve(port=3222)

    The platform adapter's ``init`` runs during construction, so its
    ``http.request`` normalization handler is always the first one
    subscribed.
    """

    __slots__ = ("_asgi", "_bus", "_freeze_lock", "_frozen", "_platform", "_router", "config")

    def __init__(
        self,
        state: State | None = None,
        *,
        platform: PlatformAdapter | None = None,
        config: AppConfig | None = None,
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        self._bus = EventBus(state, max_depth=self.config.max_dispatch_depth)
        self._router = Router(shadowing=self.config.route_shadowing)
        self._platform: PlatformAdapter = platform or ASGIPlatform.from_config(self.config)
        self._asgi: ASGIApp | None = None
        self._frozen = False
        self._freeze_lock = threading.Lock()

        self._bus.subscribe(ROUTE_EVENT, make_route_handler(self._router))
        self._platform.init(self._bus)

    # -- Event bus --

    @property
    def bus(self) -> EventBus:
        return self._bus

    @property
    def platform(self) -> PlatformAdapter:
        return self._platform

    def subscribe(self, event: str, handler: EventHandler) -> EventHandler:
        """Subscribe *handler* to *event*. See ``EventBus.subscribe``."""
        return self._bus.subscribe(event, handler)

    def on(self, event: str) -> Callable[[EventHandler], EventHandler]:
        """Subscribe a handler via decorator."""
        return self._bus.on(event)

    def dispatch(self, event: str, payload: Any = None) -> None:
        """Dispatch *event* synchronously. See ``EventBus.dispatch``."""
        self._bus.dispatch(event, payload)

    def state(self) -> State:
        """The current state snapshot."""
        return self._bus.state()

    # -- Route registration --

    @property
    def router(self) -> Router:
        return self._router

    @property
    def routes(self) -> tuple[Route, ...]:
        return self._router.routes

    def route(self, method: str, path: str, dispatch: str) -> Route:
        """Register *path* for *method*, raising *dispatch* when it matches.

        Methods are matched exactly, so they are stored as given; use the
        per-method helpers for the standard upper-case names.
        """
        self._check_not_frozen()
        return self._router.add(method, path, dispatch)

    def get(self, path: str, dispatch: str) -> Route:
        """Register a GET route."""
        return self.route("GET", path, dispatch)

    def post(self, path: str, dispatch: str) -> Route:
        """Register a POST route."""
        return self.route("POST", path, dispatch)

    def put(self, path: str, dispatch: str) -> Route:
        """Register a PUT route."""
        return self.route("PUT", path, dispatch)

    def delete(self, path: str, dispatch: str) -> Route:
        """Register a DELETE route."""
        return self.route("DELETE", path, dispatch)

    def patch(self, path: str, dispatch: str) -> Route:
        """Register a PATCH route."""
        return self.route("PATCH", path, dispatch)

    def options(self, path: str, dispatch: str) -> Route:
        """Register a OPTIONS route."""
        return self.route("OPTIONS", path, dispatch)

    def head(self, path: str, dispatch: str) -> Route:
        """Register a HEAD route."""
        return self.route("HEAD", path, dispatch)

    def trace(self, path: str, dispatch: str) -> Route:
        """Register a TRACE route."""
        return self.route("TRACE", path, dispatch)

    def connect(self, path: str, dispatch: str) -> Route:
        """Register a CONNECT route."""
        return self.route("CONNECT", path, dispatch)

    # -- Server --

    def serve(self, host: str | None = None, port: int | None = None) -> None:
        """Freeze the route table and hand the bus to the platform's server."""
        self._ensure_frozen()
        self._platform.serve(
            self._bus,
            host=self.config.host if host is None else host,
            port=self.config.port if port is None else port,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point, for platforms that provide one."""
        self._ensure_frozen()
        if self._asgi is None:
            application = getattr(self._platform, "application", None)
            if application is None:
                msg = (
                    f"{type(self._platform).__name__} is not an ASGI platform; "
                    "use app.serve() instead of mounting the app in an ASGI server."
                )
                raise ConfigurationError(msg)
            self._asgi = application(self._bus)
        await self._asgi(scope, receive, send)

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._router.compile()
            self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot add routes after the app has started serving requests. "
                "Register routes before calling app.serve()."
            )
            raise RuntimeError(msg)

