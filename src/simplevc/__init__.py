"""simplevc: a lightweight controller and view layer.

Routes map URLs to controller methods; controllers fill a view's data
bag; views render kida templates inside a layout.

Basic usage::

    from simplevc import App, Controller, Route, RouteCollection

    class PagesController(Controller):
        def home(self) -> None:
            self.set({"title": "Home"})          # renders Pages/home.html

    routes = RouteCollection()
    routes.add("home", Route("/", {"_controller": (PagesController, "home")}))

    app = App(routes)
    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "Controller",
    "ErrorRenderer",
    "ErrorView",
    "HTTPError",
    "MethodNotAllowed",
    "Redirect",
    "Request",
    "Response",
    "Route",
    "RouteCollection",
    "RouteNotFoundError",
    "SimpleVCError",
    "View",
    "env",
    "get_request",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import simplevc`` fast while providing a clean top-level API.
    """
    if name == "App":
        from simplevc.app import App

        return App

    if name == "AppConfig":
        from simplevc.config import AppConfig

        return AppConfig

    if name == "Controller":
        from simplevc.controller.controller import Controller

        return Controller

    if name == "ErrorRenderer":
        from simplevc.error.renderer import ErrorRenderer

        return ErrorRenderer

    if name in ("View", "ErrorView"):
        from simplevc import view as _view

        return getattr(_view, name)

    if name == "Request":
        from simplevc.http.request import Request

        return Request

    if name in ("Response", "Redirect"):
        from simplevc.http import response as _resp

        return getattr(_resp, name)

    if name in ("Route", "RouteCollection"):
        from simplevc import routing as _routing

        return getattr(_routing, name)

    if name == "env":
        from simplevc.env import env

        return env

    if name == "get_request":
        from simplevc.context import get_request

        return get_request

    if name in (
        "ConfigurationError",
        "HTTPError",
        "MethodNotAllowed",
        "RouteNotFoundError",
        "SimpleVCError",
    ):
        from simplevc import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
