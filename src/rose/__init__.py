"""Rose — HTTP routing on a synchronous, immutable-state event bus.

Requests become state transitions: the platform folds each request into
state, the router picks the application event to raise, and handlers
fold a response back in.

Basic usage::

    from rose import App, Dispatch, Result

    app = App(state={"name": None})

    app.get("/hello/:who", "http.request.hello")

    @app.on("http.request.hello")
    def hello(state, params):
        return Result(
            {**state, "name": params["who"]},
            Dispatch("http.response.plain", {"body": f"Hello: {params['who']}"}),
        )

    app.serve(port=3222)
"""

__version__ = "0.1.0.dev0"
__all__ = [
    "ASGIPlatform",
    "App",
    "AppConfig",
    "ConfigurationError",
    "CyclicDispatchError",
    "Dispatch",
    "EventBus",
    "PlatformAdapter",
    "Request",
    "Response",
    "Result",
    "RoseError",
    "Route",
    "Router",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import rose`` fast while providing a clean top-level API.
    """
    if name == "App":
        from rose.app import App

        return App

    if name == "AppConfig":
        from rose.config import AppConfig

        return AppConfig

    if name in ("EventBus", "Dispatch", "Result"):
        from rose import bus as _bus

        return getattr(_bus, name)

    if name == "Request":
        from rose.http.request import Request

        return Request

    if name == "Response":
        from rose.http.response import Response

        return Response

    if name == "Route":
        from rose.routing.route import Route

        return Route

    if name == "Router":
        from rose.routing.router import Router

        return Router

    if name in ("ASGIPlatform", "PlatformAdapter"):
        from rose import platform as _platform

        return getattr(_platform, name)

    if name in ("RoseError", "ConfigurationError", "CyclicDispatchError"):
        from rose import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
