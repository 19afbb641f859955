"""Tests for rose.__init__ — every public name resolves lazily."""

import pytest

import rose


@pytest.mark.parametrize("name", rose.__all__)
def test_all_names_resolve(name: str) -> None:
    obj = getattr(rose, name)
    assert obj is not None, f"rose.{name} resolved to None"


def test_names_come_from_home_modules() -> None:
    from rose.bus import EventBus
    from rose.routing.router import Router

    assert rose.EventBus is EventBus
    assert rose.Router is Router


def test_unknown_name_raises_attribute_error() -> None:
    with pytest.raises(AttributeError, match="no attribute"):
        rose.__getattr__("ThisDoesNotExist")
