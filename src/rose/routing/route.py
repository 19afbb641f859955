"""Route and RouteMatch frozen dataclasses."""

from dataclasses import dataclass

HTTP_METHODS: tuple[str, ...] = (
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

PARAM_PREFIX = ":"


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    ``path`` is ``/``-delimited; a segment starting with ``:`` binds the
    request segment at that position to the name after the colon.
    ``dispatch`` is the event raised when the route matches.
    """

    method: str
    path: str
    dispatch: str

    @property
    def param_names(self) -> tuple[str, ...]:
        return tuple(param_name(seg) for seg in self.path.split("/") if is_param_segment(seg))


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    params: dict[str, str]


def is_param_segment(segment: str) -> bool:
    return segment.startswith(PARAM_PREFIX)


def param_name(segment: str) -> str:
    return segment[len(PARAM_PREFIX) :]
