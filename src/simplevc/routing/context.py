"""Routing context: the request facts the matcher needs."""

from dataclasses import dataclass

from simplevc.http.request import Request


@dataclass(slots=True)
class RequestContext:
    """Host, scheme, method and path of the request being matched.

    Updated from each request before matching, so one router can serve
    many requests in turn.
    """

    host: str = "localhost"
    scheme: str = "http"
    method: str = "GET"
    path: str = "/"
    query_string: str = ""

    def from_request(self, request: Request) -> RequestContext:
        """Copy the routing-relevant parts of *request* into this context."""
        self.host = request.host
        self.scheme = request.scheme
        self.method = request.method.upper()
        self.path = request.path or "/"
        self.query_string = request.query.encode()
        return self
