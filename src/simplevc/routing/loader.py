"""Routes file loading.

A routes file is a plain Python module that defines a module-level
``routes`` name bound to a ``RouteCollection`` (or a zero-argument
function returning one)::

    # config/routes.py
    from simplevc.routing import Route, RouteCollection

    from app.controllers import PagesController

    routes = RouteCollection()
    routes.add("home", Route("/", {"_controller": (PagesController, "home")}))
"""

import importlib.util
from pathlib import Path

from simplevc.errors import ConfigurationError
from simplevc.routing.collection import RouteCollection


def load_routes(source: RouteCollection | str | Path) -> RouteCollection:
    """Return *source* if it is already a collection, else load it from a file.

    Raises:
        ConfigurationError: If the file does not exist, cannot be imported,
            or does not define a ``RouteCollection`` named ``routes``.
    """
    if isinstance(source, RouteCollection):
        return source

    path = Path(source)
    if not path.is_file():
        msg = f"Routes file {str(path)!r} does not exist."
        raise ConfigurationError(msg)

    module_name = f"_simplevc_routes_{path.stem}_{abs(hash(path.resolve()))}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        msg = f"Routes file {str(path)!r} cannot be imported."
        raise ConfigurationError(msg)

    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        msg = f"Routes file {str(path)!r} failed to load: {exc}"
        raise ConfigurationError(msg) from exc

    routes = getattr(module, "routes", None)
    if callable(routes) and not isinstance(routes, RouteCollection):
        routes = routes()

    if not isinstance(routes, RouteCollection):
        msg = (
            f"Routes file {str(path)!r} must define `routes` as an instance of "
            f"`{RouteCollection.__module__}.{RouteCollection.__name__}`."
        )
        raise ConfigurationError(msg)

    return routes
