"""Route, PathSegment and RouteMatch frozen dataclasses."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Static:  ``/users``  (is_param=False)
    Param:   ``/{id}``   (is_param=True, param_name="id")
    Typed:   ``/{id:int}`` (is_param=True, param_name="id", param_type="int")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    ``defaults`` are merged into the match parameters. The controller
    reference lives under ``_controller``, either as a pair::

        Route("/users/{id:int}", {"_controller": (UserController, "show")})

    or as a single string::

        Route("/users/{id:int}", {"_controller": "app.controllers.UserController::show"})

    An empty ``methods`` set accepts any HTTP method.
    """

    path: str
    defaults: Mapping[str, Any] = field(default_factory=dict)
    methods: frozenset[str] = frozenset()
    name: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "defaults", MappingProxyType(dict(self.defaults)))
        object.__setattr__(self, "methods", frozenset(m.upper() for m in self.methods))

    @property
    def controller(self) -> Any:
        """The ``_controller`` default, or ``None``."""
        return self.defaults.get("_controller")

    def accepts(self, method: str) -> bool:
        """True if *method* is allowed on this route."""
        return not self.methods or method.upper() in self.methods


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path_params: dict[str, str]

    @property
    def parameters(self) -> dict[str, Any]:
        """Route defaults, path parameters and ``_route``, ready for ``request.attributes``."""
        params: dict[str, Any] = dict(self.route.defaults)
        params.update(self.path_params)
        if self.route.name is not None:
            params["_route"] = self.route.name
        return params
