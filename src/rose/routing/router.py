"""Ordered route table with segment-wise path matching.

Matching is strict: pattern and path are split on ``/`` as-is, so
``/users`` and ``/users/`` are different paths. Routes are tried in
registration order and the first match wins.
"""

import logging
from collections.abc import Iterable, Iterator

from rose.errors import ConfigurationError
from rose.routing.route import Route, RouteMatch, is_param_segment, param_name

logger = logging.getLogger("rose.routing")


def split_path(path: str) -> list[str]:
    """Split a pattern or pathname into segments, keeping empty ones."""
    return path.split("/")


def segments_match(pattern: list[str], parts: list[str]) -> bool:
    """True if every pattern segment is a parameter or equals its part."""
    if len(pattern) != len(parts):
        return False
    return all(
        is_param_segment(seg) or seg == part for seg, part in zip(pattern, parts, strict=True)
    )


def match_route(routes: Iterable[Route], pathname: str, method: str) -> Route | None:
    """Return the first route matching *method* and *pathname*, or ``None``.

    Methods are compared as exact strings.
    """
    parts = split_path(pathname)
    for route in routes:
        if route.method == method and segments_match(split_path(route.path), parts):
            return route
    return None


def extract_params(route: Route, pathname: str) -> dict[str, str]:
    """Bind each ``:name`` segment of *route* to its segment in *pathname*.

    Names are bound left to right, so a repeated name keeps the later value.
    """
    params: dict[str, str] = {}
    for seg, part in zip(split_path(route.path), split_path(pathname), strict=False):
        if is_param_segment(seg):
            params[param_name(seg)] = part
    return params


def shadows(earlier: Route, later: Route) -> bool:
    """True if *earlier* matches every request *later* could match."""
    if earlier.method != later.method:
        return False
    before = split_path(earlier.path)
    after = split_path(later.path)
    if len(before) != len(after):
        return False
    return all(is_param_segment(a) or a == b for a, b in zip(before, after, strict=True))


class Router:
    """Append-only route table.

    Usage::

        router = Router()
        router.add("GET", "/hello/:who", "http.request.hello")
        router.compile()
        match = router.match("GET", "/hello/world")
        assert match.params == {"who": "world"}

    *shadowing* decides what happens when a new route is unreachable
    because an earlier one already covers it: ``"warn"`` logs it,
    ``"error"`` raises ``ConfigurationError``, ``"ignore"`` keeps quiet.
    The route is registered in every case except ``"error"``.
    """

    __slots__ = ("_compiled", "_routes", "_shadowing")

    def __init__(self, *, shadowing: str = "warn") -> None:
        self._routes: list[Route] = []
        self._compiled = False
        self._shadowing = shadowing

    def add(self, method: str, path: str, dispatch: str) -> Route:
        """Append a route. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

        route = Route(method=method, path=path, dispatch=dispatch)
        self._check_shadowing(route)
        self._routes.append(route)
        return route

    def _check_shadowing(self, route: Route) -> None:
        if self._shadowing == "ignore":
            return
        for existing in self._routes:
            if not shadows(existing, route):
                continue
            msg = (
                f"Route {route.method} {route.path} -> {route.dispatch!r} is unreachable: "
                f"{existing.method} {existing.path} -> {existing.dispatch!r} "
                "was registered first and matches the same requests."
            )
            if self._shadowing == "error":
                raise ConfigurationError(msg)
            logger.warning(msg)
            return

    @property
    def routes(self) -> tuple[Route, ...]:
        """All registered routes, in registration order."""
        return tuple(self._routes)

    @property
    def compiled(self) -> bool:
        return self._compiled

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    def match(self, method: str, pathname: str) -> RouteMatch | None:
        """Match a request against the table; ``None`` if nothing matches."""
        route = match_route(self._routes, pathname, method)
        if route is None:
            return None
        return RouteMatch(route=route, params=extract_params(route, pathname))

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)
