"""Fallback responses for requests the application did not answer.

Covers the three outcomes the core leaves to the transport: nothing
routed (404), an oversized body (413), and a handler that raised (500).
"""

import logging
import traceback

from rose.http.response import Response

logger = logging.getLogger("rose.server")

_PLAIN = {"Content-Type": "text/plain"}


def not_found_response(body: str = "Not found.") -> Response:
    return Response(body=body, status=404, headers=_PLAIN)


def request_too_large_response(limit: int) -> Response:
    return Response(body=f"Request body exceeds {limit} bytes.", status=413, headers=_PLAIN)


def internal_error_response(exc: BaseException, *, debug: bool) -> Response:
    """Log *exc* and build a 500 response.

    In debug mode the body carries the traceback; otherwise it is a
    generic message so internals never leak to clients.
    """
    logger.error("Unhandled error while dispatching request", exc_info=exc)
    if debug:
        body = "".join(traceback.format_exception(exc))
    else:
        body = "Internal Server Error"
    return Response(body=body, status=500, headers=_PLAIN)
