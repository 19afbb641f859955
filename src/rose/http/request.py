"""Normalized HTTP request.

The value a platform adapter folds into ``state["http"]["request"]``.
Frozen, and complete: adapters buffer the whole body before building
one, so handlers never wait on the transport.
"""

from __future__ import annotations

import json as json_module
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qs, urlsplit

from rose.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``path`` is the raw pathname exactly as it appeared in the URL
    (still percent-encoded), which is what the router splits on.
    """

    method: str
    url: str
    path: str
    query: str = ""
    headers: Headers = field(default_factory=Headers)
    body: bytes | None = None
    client: tuple[str, int] | None = None

    # -- Computed properties --

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def query_params(self) -> dict[str, list[str]]:
        """The query string parsed into lists of values per key."""
        return parse_qs(self.query, keep_blank_values=True)

    # -- Body access --

    def text(self) -> str:
        """The body decoded as UTF-8 (empty when there is none)."""
        return (self.body or b"").decode("utf-8")

    def json(self) -> Any:
        """The body parsed as JSON."""
        return json_module.loads(self.body or b"null")

    # -- Factories --

    @classmethod
    def build(
        cls,
        url: str,
        method: str = "GET",
        *,
        headers: Mapping[str, str] | None = None,
        body: bytes | str | None = None,
        client: tuple[str, int] | None = None,
    ) -> Request:
        """Create a Request from a URL (absolute, or just a path)."""
        parts = urlsplit(url)
        if isinstance(body, str):
            body = body.encode("utf-8")
        return cls(
            method=method,
            url=url,
            path=parts.path or "/",
            query=parts.query,
            headers=Headers((headers or {}).items()),
            body=body,
            client=client,
        )

    @classmethod
    def from_asgi(cls, scope: Mapping[str, Any], body: bytes | None = None) -> Request:
        """Create a Request from an ASGI HTTP scope and its buffered body."""
        headers = Headers.from_raw(scope.get("headers", ()))
        raw_path = scope.get("raw_path")
        path = raw_path.decode("latin-1") if raw_path else scope["path"]
        query = scope.get("query_string", b"").decode("latin-1")

        host = headers.get("host")
        if host is None and scope.get("server"):
            server_host, server_port = scope["server"]
            host = f"{server_host}:{server_port}"
        scheme = scope.get("scheme", "http")
        url = f"{scheme}://{host or 'localhost'}{path}"
        if query:
            url = f"{url}?{query}"

        client = scope.get("client")
        return cls(
            method=scope["method"],
            url=url,
            path=path,
            query=query,
            headers=headers,
            body=body,
            client=tuple(client) if client else None,
        )
