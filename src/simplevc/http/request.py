"""HTTP request.

Metadata (method, path, headers, query) is fixed at creation. The
``attributes`` bag and ``session`` are the mutable parts: the dispatcher
merges route parameters into ``attributes`` and attaches the session
before a controller runs.
"""

from __future__ import annotations

import json as json_module
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode, urlsplit

from simplevc.http.cookies import parse_cookies
from simplevc.http.headers import Headers
from simplevc.http.query import QueryParams

if TYPE_CHECKING:
    from simplevc.http.sessions import Session

_BODYLESS_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})


@dataclass(slots=True)
class Request:
    """An incoming HTTP request.

    Created once per call and passed by reference through the whole
    pipeline. The body is held in memory; ``text()``, ``json()`` and
    ``form()`` decode it on demand.
    """

    method: str
    path: str
    headers: Headers = field(default_factory=Headers)
    query: QueryParams = field(default_factory=QueryParams)
    body: bytes = b""
    cookies: Mapping[str, str] = field(default_factory=dict)
    scheme: str = "http"
    server: tuple[str, int] | None = None
    client: tuple[str, int] | None = None
    attributes: dict[str, Any] = field(default_factory=dict)
    session: Session | None = None

    # -- Computed properties --

    @property
    def host(self) -> str:
        """Host name from the ``Host`` header, falling back to the server address."""
        header = self.headers.get("host")
        if header:
            return header.split(":", 1)[0]
        if self.server is not None:
            return self.server[0]
        return "localhost"

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def is_secure(self) -> bool:
        return self.scheme == "https"

    @property
    def url(self) -> str:
        """Request path plus query string."""
        qs = self.query.encode()
        if qs:
            return f"{self.path}?{qs}"
        return self.path

    # -- Body access --

    def text(self) -> str:
        """Decode the body as UTF-8."""
        return self.body.decode("utf-8")

    def json(self) -> Any:
        """Parse the body as JSON."""
        return json_module.loads(self.body or b"null")

    def form(self) -> QueryParams:
        """Parse an ``application/x-www-form-urlencoded`` body.

        Raises:
            ValueError: If the Content-Type is not URL-encoded form data.
        """
        ct = (self.content_type or "application/x-www-form-urlencoded").lower()
        if not ct.startswith("application/x-www-form-urlencoded"):
            msg = f"Cannot parse {ct!r} body as form data."
            raise ValueError(msg)
        return QueryParams(self.body)

    # -- Factories --

    @classmethod
    def create(
        cls,
        uri: str,
        method: str = "GET",
        parameters: Mapping[str, Any] | None = None,
        *,
        headers: Mapping[str, str] | None = None,
        cookies: Mapping[str, str] | None = None,
        body: bytes | str | None = None,
    ) -> Request:
        """Build a request without a server, for tests and tooling.

        *uri* may be a bare path (``"/users/1?tab=posts"``) or an absolute
        URL (``"https://example.com/users/1"``). For GET/HEAD/OPTIONS,
        *parameters* are merged into the query string; for other methods
        they become a URL-encoded body unless *body* is given.
        """
        method = method.upper()
        parts = urlsplit(uri)
        scheme = parts.scheme or "http"
        hostname = parts.hostname or "localhost"
        port = parts.port or (443 if scheme == "https" else 80)

        header_items: dict[str, str] = {"host": parts.netloc or hostname}
        query_string = parts.query
        raw_body = body.encode("utf-8") if isinstance(body, str) else (body or b"")

        if parameters:
            if method in _BODYLESS_METHODS:
                extra = urlencode(parameters, doseq=True)
                query_string = f"{query_string}&{extra}" if query_string else extra
            elif body is None:
                raw_body = urlencode(parameters, doseq=True).encode("utf-8")
                header_items["content-type"] = "application/x-www-form-urlencoded"

        if cookies:
            header_items["cookie"] = "; ".join(f"{k}={v}" for k, v in cookies.items())
        for name, value in (headers or {}).items():
            header_items[name.lower()] = value

        return cls(
            method=method,
            path=parts.path or "/",
            headers=Headers(header_items),
            query=QueryParams(query_string),
            body=raw_body,
            cookies=dict(cookies or {}) or parse_cookies(header_items.get("cookie", "")),
            scheme=scheme,
            server=(hostname, port),
        )

    @classmethod
    def from_asgi(cls, scope: Mapping[str, Any], body: bytes = b"") -> Request:
        """Create a Request from an ASGI HTTP scope and its fully read body."""
        headers = Headers.from_raw(scope.get("headers", ()))
        server = scope.get("server")
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=headers,
            query=QueryParams(scope.get("query_string", b"")),
            body=body,
            cookies=parse_cookies(headers.get("cookie", "")),
            scheme=scope.get("scheme", "http"),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
        )
