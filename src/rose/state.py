"""State cell and copy-on-write update helpers.

The application state is a single immutable snapshot. Handlers never
mutate it; they build a new one that shares every untouched
sub-structure with the old one::

    new = assoc_in(state, ("http", "response"), response)
    assert new["name"] is state["name"]   # shared
    assert new is not state               # replaced
"""

from collections.abc import Mapping, Sequence
from typing import Any

State = Mapping[str, Any]


class StateCell:
    """Holds the current state snapshot.

    Written only by the :class:`~rose.bus.EventBus` that owns it.
    Everyone else reads through :meth:`get`.
    """

    __slots__ = ("_snapshot",)

    def __init__(self, initial: State) -> None:
        self._snapshot = initial

    def get(self) -> State:
        return self._snapshot

    def set(self, snapshot: State) -> None:
        self._snapshot = snapshot

    def __repr__(self) -> str:
        return f"StateCell({self._snapshot!r})"


def get_in(state: Mapping[str, Any] | None, path: Sequence[str], default: Any = None) -> Any:
    """Read a nested value, returning *default* when any step is missing."""
    node: Any = state
    for key in path:
        if not isinstance(node, Mapping) or key not in node:
            return default
        node = node[key]
    return node


def assoc(state: Mapping[str, Any] | None, key: str, value: Any) -> dict[str, Any]:
    """Return a shallow copy of *state* with *key* set to *value*."""
    return {**(state or {}), key: value}


def assoc_in(state: Mapping[str, Any] | None, path: Sequence[str], value: Any) -> dict[str, Any]:
    """Return a copy of *state* with the nested *path* set to *value*.

    Only the mappings along *path* are copied; siblings are shared with
    the previous snapshot. Missing intermediate levels are created.
    """
    if not path:
        msg = "assoc_in() needs a non-empty path"
        raise ValueError(msg)
    head, *rest = path
    if not rest:
        return assoc(state, head, value)
    child = state.get(head) if state else None
    if child is not None and not isinstance(child, Mapping):
        msg = f"Cannot set {'.'.join(path)!r}: {head!r} holds a {type(child).__name__}"
        raise TypeError(msg)
    return assoc(state, head, assoc_in(child, rest, value))
