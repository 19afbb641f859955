"""ASGI platform adapter.

The only component that touches raw ASGI. Buffers the request body,
dispatches ``http.request`` into the bus, reads the folded response back
out of state, and sends it. The body is read completely before the
dispatch starts, so the normalized request always carries it.
"""

import threading
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from rose._internal.types import ASGIApp, Receive, Scope, Send
from rose.bus import EventBus, Result
from rose.config import AppConfig
from rose.errors import ClientDisconnected, RequestTooLarge
from rose.http.events import REQUEST, install_response_handlers
from rose.http.request import Request
from rose.http.response import Response
from rose.server.errors import (
    internal_error_response,
    not_found_response,
    request_too_large_response,
)
from rose.server.sender import send_response
from rose.state import State, assoc, get_in


@dataclass(frozen=True, slots=True)
class ASGIRequest:
    """Raw payload of ``http.request`` on this platform."""

    scope: Scope
    body: bytes


def normalize_request(state: State, raw: ASGIRequest | Request | None) -> Result:
    """Fold a raw request into ``state["http"]``, replacing the previous one.

    Starting from a fresh ``http`` mapping drops the last request's
    response, so a stale response can never answer a new request.
    """
    if raw is None:
        return Result(state)
    request = raw if isinstance(raw, Request) else Request.from_asgi(raw.scope, raw.body)
    return Result(assoc(state, "http", {"request": request}))


async def read_body(receive: Receive, limit: int) -> bytes:
    """Read the full request body.

    Raises ``RequestTooLarge`` past *limit* and ``ClientDisconnected`` if
    the client leaves before the last chunk.
    """
    chunks: list[bytes] = []
    size = 0
    while True:
        message = await receive()
        if message["type"] == "http.disconnect":
            raise ClientDisconnected
        chunk = message.get("body", b"")
        if chunk:
            size += len(chunk)
            if size > limit:
                raise RequestTooLarge(limit)
            chunks.append(chunk)
        if not message.get("more_body", False):
            break
    return b"".join(chunks)


def _as_response(value: Any) -> Response:
    if isinstance(value, Response):
        return value
    if isinstance(value, Mapping):
        return Response(
            body=value.get("body", ""),
            status=value.get("status", 200),
            headers=value.get("headers") or {},
        )
    msg = f"state['http']['response'] holds a {type(value).__name__}, not a Response"
    raise TypeError(msg)


async def _handle_lifespan(receive: Receive, send: Send) -> None:
    while True:
        message = await receive()
        if message["type"] == "lifespan.startup":
            await send({"type": "lifespan.startup.complete"})
        elif message["type"] == "lifespan.shutdown":
            await send({"type": "lifespan.shutdown.complete"})
            return


class ASGIPlatform:
    """Serve a rose event bus over ASGI.

    Thread safety:
        One bus holds one state snapshot, so a dispatch and the read of
        its response must not interleave with another request's. Servers
        running several worker threads against one app are serialized
        through a per-platform lock.
    """

    __slots__ = (
        "_lock",
        "debug",
        "log_level",
        "max_content_length",
        "not_found_body",
        "reload",
        "workers",
    )

    def __init__(
        self,
        *,
        debug: bool = False,
        max_content_length: int = 16 * 1024 * 1024,
        not_found_body: str = "Not found.",
        workers: int = 1,
        reload: bool = False,
        log_level: str = "info",
    ) -> None:
        self.debug = debug
        self.max_content_length = max_content_length
        self.not_found_body = not_found_body
        self.workers = workers
        self.reload = reload
        self.log_level = log_level
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: AppConfig) -> "ASGIPlatform":
        return cls(
            debug=config.debug,
            max_content_length=config.max_content_length,
            not_found_body=config.not_found_body,
            workers=config.workers,
            reload=config.debug,
            log_level=config.log_level,
        )

    # -- PlatformAdapter --

    def init(self, bus: EventBus) -> None:
        bus.subscribe(REQUEST, normalize_request)
        install_response_handlers(bus)

    def serve(self, bus: EventBus, *, host: str, port: int) -> None:
        from rose.server.run import run_server

        run_server(
            self.application(bus),
            host,
            port,
            workers=self.workers,
            reload=self.reload,
            log_level=self.log_level,
        )

    # -- Request handling --

    def respond(self, bus: EventBus, raw: ASGIRequest | Request) -> Response:
        """Dispatch one request and return the response it produced.

        Handler exceptions propagate to the caller.
        """
        with self._lock:
            bus.dispatch(REQUEST, raw)
            response = get_in(bus.state(), ("http", "response"))
        if response is None:
            return not_found_response(self.not_found_body)
        return _as_response(response)

    def application(self, bus: EventBus) -> ASGIApp:
        """Build the ASGI 3.0 callable serving *bus*."""

        async def app(scope: Scope, receive: Receive, send: Send) -> None:
            if scope["type"] == "lifespan":
                await _handle_lifespan(receive, send)
                return
            if scope["type"] != "http":
                return

            try:
                body = await read_body(receive, self.max_content_length)
            except RequestTooLarge as exc:
                await send_response(request_too_large_response(exc.limit), send)
                return
            except ClientDisconnected:
                return

            try:
                response = self.respond(bus, ASGIRequest(scope=scope, body=body))
            except Exception as exc:
                response = internal_error_response(exc, debug=self.debug)

            await send_response(response, send)

        return app
