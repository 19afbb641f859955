"""Request pipeline — routes a normalized request to its application event.

The app subscribes the handler built here to ``$.http.request``, so it
runs only after the platform's ``http.request`` normalization has folded
the request into state. It never builds a response itself: a match
becomes a dispatch to the route's event, and a miss stores ``None`` in
``state["http"]["response"]`` to mean "nothing answers this".
"""

from rose._internal.types import EventHandler
from rose.bus import Dispatch, Result, meta_event
from rose.http.events import REQUEST
from rose.routing.router import Router
from rose.state import State, assoc_in, get_in

ROUTE_EVENT = meta_event(REQUEST)


def make_route_handler(router: Router) -> EventHandler:
    """Build the ``$.http.request`` subscriber for *router*."""

    def route_request(state: State, _payload: object = None) -> Result:
        request = get_in(state, ("http", "request"))
        if request is None:
            return Result(state)

        match = router.match(request.method, request.path)
        if match is None:
            return Result(assoc_in(state, ("http", "response"), None))

        return Result(state, Dispatch(match.route.dispatch, match.params))

    return route_request
