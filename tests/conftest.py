"""Shared fixtures: an in-process platform that needs no transport."""

from collections.abc import Mapping
from typing import Any

import pytest

from rose.bus import EventBus, Result
from rose.http.events import REQUEST, install_response_handlers
from rose.http.request import Request
from rose.state import State, assoc


def normalize_mapping(state: State, raw: Mapping[str, Any] | None) -> Result:
    """Fold ``{"url": ..., "method": ..., "body"?: ...}`` into state."""
    if raw is None:
        return Result(state)
    request = Request.build(raw["url"], raw["method"], body=raw.get("body"))
    return Result(assoc(state, "http", {"request": request}))


class StubPlatform:
    """Records calls and normalizes plain-dict requests."""

    def __init__(self) -> None:
        self.init_calls: list[EventBus] = []
        self.serve_calls: list[dict[str, Any]] = []

    def init(self, bus: EventBus) -> None:
        self.init_calls.append(bus)
        bus.subscribe(REQUEST, normalize_mapping)
        install_response_handlers(bus)

    def serve(self, bus: EventBus, *, host: str, port: int) -> None:
        self.serve_calls.append({"bus": bus, "host": host, "port": port})


@pytest.fixture
def platform() -> StubPlatform:
    return StubPlatform()
