"""Tests for rose.pipeline — routing on the request meta-event."""

from rose.bus import Dispatch
from rose.http.request import Request
from rose.pipeline import ROUTE_EVENT, make_route_handler
from rose.routing.router import Router


def _state(url: str, method: str = "GET") -> dict:
    return {"other": 1, "http": {"request": Request.build(url, method)}}


class TestRouteHandler:
    def test_listens_on_request_meta_event(self) -> None:
        assert ROUTE_EVENT == "$.http.request"

    def test_match_dispatches_with_params(self) -> None:
        router = Router()
        router.add("GET", "/hello/:who", "http.request.hello")
        state = _state("/hello/world")

        result = make_route_handler(router)(state, None)

        assert result.state is state
        assert result.dispatch == Dispatch("http.request.hello", {"who": "world"})

    def test_miss_sets_null_response(self) -> None:
        router = Router()
        router.add("GET", "/hello/:who", "e")
        state = _state("/nope")

        result = make_route_handler(router)(state, None)

        assert result.dispatch is None
        assert result.state["http"]["response"] is None
        assert result.state["http"]["request"] is state["http"]["request"]
        assert result.state["other"] == 1

    def test_no_http_state_is_noop(self) -> None:
        state = {"other": 1}
        result = make_route_handler(Router())(state, None)
        assert result.state is state
        assert result.dispatch is None

    def test_reads_live_route_table(self) -> None:
        router = Router()
        handler = make_route_handler(router)
        router.add("POST", "/items", "items.create")
        result = handler(_state("/items", "POST"), None)
        assert result.dispatch == Dispatch("items.create", {})
