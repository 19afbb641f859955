"""Synchronous event bus over an immutable state snapshot.

Handlers subscribe to string-keyed events. A dispatch folds the state
through every handler of the event in registration order, follows any
dispatch instruction a handler returns depth-first, then raises the
``$.``-prefixed meta-event so observers see the fully folded state::

    bus = EventBus({"count": 0})

    @bus.on("inc")
    def inc(state, amount):
        return Result({**state, "count": state["count"] + amount})

    bus.dispatch("inc", 2)
    assert bus.state() == {"count": 2}

There is no queue and no locking. One dispatch runs to completion (or
raises) before it returns; callers that can receive concurrent requests
must serialize their calls into a given bus.
"""

import logging
import sys
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from rose._internal.types import EventHandler
from rose.errors import ConfigurationError, CyclicDispatchError
from rose.state import State, StateCell

logger = logging.getLogger("rose.bus")

META_PREFIX = "$."
DEFAULT_MAX_DEPTH = 64

# A hop can nest two dispatch frames (an event, then its meta-event whose
# handler chains on), and the caller needs room of its own.
_FRAMES_PER_HOP = 2
_STACK_HEADROOM = 200


@dataclass(frozen=True, slots=True)
class Dispatch:
    """An instruction to dispatch *to* with *payload* before returning."""

    to: str
    payload: Any = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Dispatch":
        """Build from the wire shape ``{"to": ..., "with": ...}``."""
        return cls(to=data["to"], payload=data.get("with"))


@dataclass(frozen=True, slots=True)
class Result:
    """What a handler returns: the next state and an optional follow-up."""

    state: State
    dispatch: Dispatch | None = None


def meta_event(event: str) -> str:
    """Name of the meta-event raised after *event*'s handlers finish."""
    return META_PREFIX + event


def is_meta_event(event: str) -> bool:
    return event.startswith(META_PREFIX)


def max_safe_depth() -> int:
    """Deepest dispatch chain the interpreter recursion limit leaves room for."""
    return max(1, (sys.getrecursionlimit() - _STACK_HEADROOM) // _FRAMES_PER_HOP)


def check_max_depth(max_depth: int) -> None:
    """Raise ``ConfigurationError`` unless *max_depth* is usable."""
    limit = max_safe_depth()
    if not 1 <= max_depth <= limit:
        msg = (
            f"max_dispatch_depth must be between 1 and {limit} "
            f"(bounded by sys.getrecursionlimit()), got {max_depth}"
        )
        raise ConfigurationError(msg)


def _coerce_result(value: Any, event: str, handler: EventHandler) -> Result:
    if isinstance(value, Result):
        return value
    if isinstance(value, Mapping) and "state" in value:
        instruction = value.get("dispatch")
        if instruction is not None and not isinstance(instruction, Dispatch):
            instruction = Dispatch.from_mapping(instruction)
        return Result(state=value["state"], dispatch=instruction)
    name = getattr(handler, "__qualname__", repr(handler))
    msg = (
        f"Handler {name} for {event!r} returned {type(value).__name__}; "
        "expected a Result (or a mapping with a 'state' key)."
    )
    raise TypeError(msg)


class EventBus:
    """Subscription registry plus depth-first dispatch engine.

    Owns its :class:`~rose.state.StateCell`; the state is only ever
    replaced by the value a handler returns.
    """

    __slots__ = ("_cell", "_max_depth", "_subscriptions")

    def __init__(self, state: State | None = None, *, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        check_max_depth(max_depth)
        self._cell = StateCell({} if state is None else state)
        self._subscriptions: dict[str, list[EventHandler]] = {}
        self._max_depth = max_depth

    @property
    def max_depth(self) -> int:
        return self._max_depth

    # -- Subscriptions --

    def subscribe(self, event: str, handler: EventHandler) -> EventHandler:
        """Append *handler* to the handlers of *event* and return it."""
        self._subscriptions.setdefault(event, []).append(handler)
        return handler

    def on(self, event: str) -> Callable[[EventHandler], EventHandler]:
        """Subscribe a handler via decorator."""

        def decorator(func: EventHandler) -> EventHandler:
            return self.subscribe(event, func)

        return decorator

    def subscriptions(self, event: str) -> tuple[EventHandler, ...]:
        """Handlers registered for *event*, in invocation order."""
        return tuple(self._subscriptions.get(event, ()))

    # -- State --

    def state(self) -> State:
        """The current snapshot. Treat it as read-only."""
        return self._cell.get()

    # -- Dispatch --

    def dispatch(self, event: str, payload: Any = None) -> None:
        """Run every handler of *event*, then its meta-event.

        Exceptions raised by handlers propagate unchanged. Folds that
        completed before the failure stay applied.
        """
        self._dispatch(event, payload, 0)

    def _dispatch(self, event: str, payload: Any, depth: int) -> None:
        if depth > self._max_depth:
            raise CyclicDispatchError(event=event, depth=self._max_depth)

        handlers = self.subscriptions(event)
        if handlers:
            logger.debug("dispatch %s (%d handlers, depth %d)", event, len(handlers), depth)

        for handler in handlers:
            result = _coerce_result(handler(self._cell.get(), payload), event, handler)
            self._cell.set(result.state)
            if result.dispatch is not None:
                self._dispatch(result.dispatch.to, result.dispatch.payload, depth + 1)

        if not is_meta_event(event):
            self._dispatch(meta_event(event), None, depth)
