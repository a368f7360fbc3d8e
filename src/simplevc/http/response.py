"""HTTP response.

A ``Response`` is a frozen value. The ``with_*`` methods each return an
updated copy, so controllers can build one up step by step::

    return Response(html).with_status(201).with_header("X-Request-Id", rid)

Controllers either return one directly or let the dispatcher render the
view into one.
"""

import json as json_module
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

from simplevc.http.cookies import SetCookie

HTML = "text/html; charset=utf-8"

_REDIRECT_STATUSES = frozenset({201, 301, 302, 303, 307, 308})


@dataclass(frozen=True, slots=True)
class Response:
    """Status, content type, headers, cookies and a body.

    Headers are kept as ordered ``(name, value)`` pairs so repeated names
    survive. Transmission belongs to the ASGI sender, never to the
    dispatcher.
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str = HTML
    headers: tuple[tuple[str, str], ...] = ()
    cookies: tuple[SetCookie, ...] = ()

    # -- Updated copies --

    def with_status(self, status: int) -> Response:
        return replace(self, status=status)

    def with_content_type(self, content_type: str) -> Response:
        return replace(self, content_type=content_type)

    def with_header(self, name: str, value: str) -> Response:
        """Copy with one more header; existing values for *name* are kept."""
        return self.with_headers({name: value})

    def with_headers(self, headers: Mapping[str, str]) -> Response:
        return replace(self, headers=self.headers + tuple(headers.items()))

    def with_cookie(self, name: str, value: str, **attributes: Any) -> Response:
        """Copy with one more ``Set-Cookie``.

        *attributes* are ``SetCookie`` fields: ``max_age``, ``path``,
        ``domain``, ``secure``, ``httponly`` and ``samesite``.
        """
        return replace(self, cookies=(*self.cookies, SetCookie(name, value, **attributes)))

    def without_cookie(self, name: str, path: str = "/") -> Response:
        """Copy that tells the client to drop cookie *name* (``Max-Age=0``)."""
        return self.with_cookie(name, "", max_age=0, path=path)

    # -- Factories --

    @classmethod
    def redirect(cls, url: str, status: int = 302) -> Response:
        return cls(status=status, headers=(("Location", url),))

    @classmethod
    def json(cls, data: Any, status: int = 200) -> Response:
        return cls(json_module.dumps(data), status, "application/json")

    # -- Inspection --

    def get_header(self, name: str) -> str | None:
        """First value of header *name*, compared case-insensitively."""
        wanted = name.lower()
        return next((value for key, value in self.headers if key.lower() == wanted), None)

    @property
    def location(self) -> str | None:
        return self.get_header("Location")

    @property
    def is_successful(self) -> bool:
        return self.status // 100 == 2

    @property
    def is_redirect(self) -> bool:
        return self.status in _REDIRECT_STATUSES and self.location is not None

    @property
    def is_client_error(self) -> bool:
        return self.status // 100 == 4

    @property
    def is_server_error(self) -> bool:
        return self.status // 100 == 5

    @property
    def body_bytes(self) -> bytes:
        return self.body.encode("utf-8") if isinstance(self.body, str) else self.body

    @property
    def text(self) -> str:
        return self.body.decode("utf-8") if isinstance(self.body, bytes) else self.body


def Redirect(url: str, status: int = 302) -> Response:  # noqa: N802
    """Shorthand for ``Response.redirect(url, status)``::

        def save(self, request: Request) -> Response:
            ...
            return Redirect("/done")
    """
    return Response.redirect(url, status)
