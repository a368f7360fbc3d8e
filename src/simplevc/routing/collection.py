"""Named, ordered collection of routes."""

from collections.abc import Iterator

from simplevc.routing.route import Route


class RouteCollection:
    """An ordered mapping of route name to ``Route``.

    Usage::

        routes = RouteCollection()
        routes.add("home", Route("/", {"_controller": (PagesController, "home")}))
        routes.add("user", Route("/users/{id:int}", {"_controller": (UserController, "show")}))

    Adding a name twice replaces the earlier route, keeping its position.
    """

    __slots__ = ("_routes",)

    def __init__(self) -> None:
        self._routes: dict[str, Route] = {}

    def add(self, name: str, route: Route) -> RouteCollection:
        """Register *route* under *name*. Chainable."""
        if route.name != name:
            route = Route(
                path=route.path,
                defaults=route.defaults,
                methods=route.methods,
                name=name,
            )
        self._routes[name] = route
        return self

    def get(self, name: str) -> Route | None:
        """Return the route registered as *name*, or ``None``."""
        return self._routes.get(name)

    def remove(self, name: str) -> None:
        self._routes.pop(name, None)

    def all(self) -> dict[str, Route]:
        """All routes keyed by name, in registration order."""
        return dict(self._routes)

    def names(self) -> list[str]:
        return list(self._routes)

    def __contains__(self, name: object) -> bool:
        return name in self._routes

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes.values())

    def __len__(self) -> int:
        return len(self._routes)

    def __repr__(self) -> str:
        return f"RouteCollection({self.names()!r})"
