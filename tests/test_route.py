"""Tests for rose.routing.route — Route and RouteMatch."""

import pytest

from rose.routing.route import HTTP_METHODS, Route, RouteMatch, is_param_segment, param_name


class TestSegments:
    def test_param_segment(self) -> None:
        assert is_param_segment(":id") is True
        assert is_param_segment("id") is False
        assert is_param_segment("") is False

    def test_param_name(self) -> None:
        assert param_name(":who") == "who"


class TestRoute:
    def test_creation(self) -> None:
        route = Route(method="GET", path="/users", dispatch="users.list")
        assert route.method == "GET"
        assert route.path == "/users"
        assert route.dispatch == "users.list"

    def test_param_names(self) -> None:
        route = Route("GET", "/users/:user/posts/:post", "e")
        assert route.param_names == ("user", "post")

    def test_frozen(self) -> None:
        route = Route("GET", "/", "e")
        with pytest.raises(AttributeError):
            route.path = "/other"  # type: ignore[misc]

    def test_equality(self) -> None:
        assert Route("GET", "/", "e") == Route("GET", "/", "e")


class TestRouteMatch:
    def test_creation(self) -> None:
        route = Route("GET", "/users/:id", "e")
        match = RouteMatch(route=route, params={"id": "42"})
        assert match.route is route
        assert match.params == {"id": "42"}


def test_standard_methods() -> None:
    assert HTTP_METHODS == (
        "GET",
        "POST",
        "PUT",
        "DELETE",
        "PATCH",
        "OPTIONS",
        "HEAD",
        "TRACE",
        "CONNECT",
    )
