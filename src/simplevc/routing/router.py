"""Compiled router with trie-based path matching.

Routes are collected in a ``RouteCollection`` and compiled into a
segment trie when the app is built. Matching walks the trie one path
segment at a time, preferring static segments over placeholders and
placeholders over a trailing ``{name:path}`` catch-all.
"""

import logging
import re
from dataclasses import dataclass, field

from simplevc.errors import ConfigurationError, MethodNotAllowed, RouteNotFoundError
from simplevc.routing.collection import RouteCollection
from simplevc.routing.context import RequestContext
from simplevc.routing.params import CATCH_ALL, is_placeholder_type, segment_regex
from simplevc.routing.route import PathSegment, Route, RouteMatch

logger = logging.getLogger("simplevc.routing")

# Endpoint key for routes with an empty ``methods`` set
ANY_METHOD = "*"

_PLACEHOLDER_RE = re.compile(r"^\{(?P<name>\w+)(?::(?P<type>\w+))?\}$")
_ANGLE_PARAM_RE = re.compile(r"<[^>]*>")


def parse_path(path: str) -> list[PathSegment]:
    """Split a route path into static and placeholder segments.

    Examples::

        "/users"             -> [PathSegment("users")]
        "/users/{id:int}"    -> [PathSegment("users"), PathSegment("{id:int}", True, "id", "int")]
        "/files/{rest:path}" -> [PathSegment("files"), PathSegment("{rest:path}", True, "rest", "path")]

    Raises ``ConfigurationError`` for ``<param>`` placeholders and unknown
    placeholder types.
    """
    if _ANGLE_PARAM_RE.search(path):
        msg = f"Route path {path!r} uses <param> placeholders; use {{param}} instead."
        raise ConfigurationError(msg)

    segments: list[PathSegment] = []
    for part in filter(None, path.strip("/").split("/")):
        placeholder = _PLACEHOLDER_RE.match(part)
        if placeholder is None:
            segments.append(PathSegment(value=part))
            continue

        param_type = placeholder["type"] or "str"
        if not is_placeholder_type(param_type):
            msg = f"Unknown converter {param_type!r} in route path {path!r}."
            raise ConfigurationError(msg)
        segments.append(PathSegment(part, True, placeholder["name"], param_type))
    return segments


@dataclass(slots=True)
class _Node:
    """One path position in the trie."""

    static: dict[str, _Node] = field(default_factory=dict)
    placeholders: list[_Placeholder] = field(default_factory=list)
    tail: _Tail | None = None
    endpoints: dict[str, Route] = field(default_factory=dict)

    def placeholder(self, segment: PathSegment) -> _Node:
        """Return the child for *segment*, creating it on first use."""
        for existing in self.placeholders:
            if existing.name == segment.param_name and existing.param_type == segment.param_type:
                return existing.node
        created = _Placeholder(
            name=segment.param_name or "",
            param_type=segment.param_type,
            regex=segment_regex(segment.param_type),
        )
        self.placeholders.append(created)
        return created.node


@dataclass(slots=True)
class _Placeholder:
    name: str
    param_type: str
    regex: re.Pattern[str]
    node: _Node = field(default_factory=_Node)


@dataclass(slots=True)
class _Tail:
    """A ``{name:path}`` placeholder: swallows the rest of the path."""

    name: str
    endpoints: dict[str, Route] = field(default_factory=dict)


def _register(endpoints: dict[str, Route], route: Route) -> None:
    for method in route.methods or (ANY_METHOD,):
        endpoints.setdefault(method, route)


def _select(
    endpoints: dict[str, Route],
    method: str,
    params: dict[str, str],
    allowed: set[str],
) -> tuple[Route, dict[str, str]] | None:
    """Pick the route for *method*, or record what the path does allow."""
    route = endpoints.get(method) or endpoints.get(ANY_METHOD)
    if route is None and method == "HEAD":
        route = endpoints.get("GET")
    if route is None:
        allowed.update(endpoints)
        return None
    return route, params


class Router:
    """Compiled router with trie-based path matching.

    Usage::

        router = Router.from_collection(routes)
        match = router.match("GET", "/users/42")
        match.parameters  # {"_controller": ..., "id": "42", "_route": "user"}

    When two routes share a path and method, the first one added wins.
    """

    __slots__ = ("_compiled", "_root", "_routes")

    def __init__(self) -> None:
        self._root = _Node()
        self._routes: list[Route] = []
        self._compiled = False

    @classmethod
    def from_collection(cls, routes: RouteCollection) -> Router:
        """Build and compile a router from every route in *routes*."""
        router = cls()
        for route in routes:
            router.add(route)
        router.compile()
        return router

    def add(self, route: Route) -> None:
        """Insert *route* into the trie. Only allowed before ``compile()``."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

        node = self._root
        for segment in parse_path(route.path):
            if segment.param_type == CATCH_ALL and segment.is_param:
                if node.tail is None:
                    node.tail = _Tail(segment.param_name or CATCH_ALL)
                _register(node.tail.endpoints, route)
                break
            if segment.is_param:
                node = node.placeholder(segment)
            else:
                node = node.static.setdefault(segment.value, _Node())
        else:
            _register(node.endpoints, route)

        self._routes.append(route)

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    @property
    def routes(self) -> list[Route]:
        """Every added route, once each, in insertion order."""
        return list(self._routes)

    # -- Matching --

    def match_context(self, context: RequestContext) -> RouteMatch:
        """Match using the method and path held in a ``RequestContext``."""
        return self.match(context.method, context.path)

    def match(self, method: str, path: str) -> RouteMatch:
        """Match *method* and *path* against the compiled routes.

        A node whose path matches but which has no route for *method* does
        not end the search: the walk backtracks into placeholder and
        catch-all branches that might serve the method.

        Raises:
            RouteNotFoundError: No route matches the path.
            MethodNotAllowed: Routes match the path but none the method.
        """
        method = method.upper()
        parts = [part for part in path.split("/") if part]

        allowed: set[str] = set()
        found = self._walk(self._root, parts, {}, method, allowed)
        if found is None:
            if allowed:
                raise MethodNotAllowed(frozenset(allowed))
            raise RouteNotFoundError(f"No route matches {method} {path!r}")

        route, params = found
        logger.debug("%s %s matched %s", method, path, route.name or route.path)
        return RouteMatch(route=route, path_params=params)

    def _walk(
        self,
        node: _Node,
        parts: list[str],
        params: dict[str, str],
        method: str,
        allowed: set[str],
    ) -> tuple[Route, dict[str, str]] | None:
        if not parts:
            return _select(node.endpoints, method, params, allowed)

        head, rest = parts[0], parts[1:]

        child = node.static.get(head)
        if child is not None:
            found = self._walk(child, rest, params, method, allowed)
            if found is not None:
                return found

        for placeholder in node.placeholders:
            if placeholder.regex.fullmatch(head):
                found = self._walk(
                    placeholder.node, rest, {**params, placeholder.name: head}, method, allowed
                )
                if found is not None:
                    return found

        if node.tail is not None:
            tail_params = {**params, node.tail.name: "/".join(parts)}
            return _select(node.tail.endpoints, method, tail_params, allowed)

        return None
