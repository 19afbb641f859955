"""Built-in HTTP events and the handlers that fold responses into state.

``http.request`` is normalized by each platform adapter. The response
events are shared by every adapter; ``install_response_handlers`` wires
them onto a bus::

    return Result(state, Dispatch(RESPONSE_PLAIN, {"body": "Hello"}))
"""

import json as json_module
from collections.abc import Mapping
from typing import Any, TypedDict

from rose.bus import EventBus, Result
from rose.http.response import Response
from rose.state import State, assoc_in

REQUEST = "http.request"
RESPONSE_PLAIN = "http.response.plain"
RESPONSE_JSON = "http.response.json"


class ResponsePayload(TypedDict, total=False):
    """Payload of ``http.response.plain`` and ``http.response.json``."""

    body: Any
    status: int
    headers: Mapping[str, str]


def _fold_response(
    state: State,
    data: Mapping[str, Any] | None,
    *,
    body: str | bytes,
    content_type: str,
) -> Result:
    data = data or {}
    status = data.get("status")
    extra = dict(data.get("headers") or {})
    headers: dict[str, str] = {}
    if not any(name.lower() == "content-type" for name in extra):
        headers["Content-Type"] = content_type
    headers.update(extra)
    response = Response(
        body=body,
        status=200 if status is None else status,
        headers=headers,
    )
    return Result(assoc_in(state, ("http", "response"), response))


def plain_response(state: State, data: ResponsePayload | None) -> Result:
    """Set a ``text/plain`` response. Status defaults to 200."""
    body = (data or {}).get("body")
    if body is None:
        body = ""
    elif not isinstance(body, (str, bytes)):
        body = str(body)
    return _fold_response(state, data, body=body, content_type="text/plain")


def json_response(state: State, data: ResponsePayload | None) -> Result:
    """Serialize ``body`` and set an ``application/json`` response.

    A missing body serializes as ``{}``.
    """
    body = (data or {}).get("body")
    text = "{}" if body is None else json_module.dumps(body)
    return _fold_response(state, data, body=text, content_type="application/json")


def install_response_handlers(bus: EventBus) -> None:
    """Subscribe the response-folding handlers every adapter provides."""
    bus.subscribe(RESPONSE_PLAIN, plain_response)
    bus.subscribe(RESPONSE_JSON, json_response)
