"""simplevc application: the request dispatcher.

An ``App`` owns a compiled router and an error renderer. ``handle()``
runs one request through the whole lifecycle and always returns a
``Response``::

    app = App("config/routes.py")
    response = app.handle(Request.create("/users/42"))

Lifecycle of ``handle()``:

1. Load the session (when ``config.secret_key`` is set)
2. Copy host, scheme, method and path into a ``RequestContext``
3. Match the route and merge its parameters into ``request.attributes``
4. Resolve ``(controller, method)`` from ``_controller``
5. Attach the request to the controller's view
6. Resolve the method's arguments and invoke it
7. Use a returned ``Response`` as-is, otherwise render the view
8. Save the session cookie

Any exception raised on the way is turned into an error page: 404 for an
unmatched route, the status of an ``HTTPError``, 500 for everything else.

``App`` is also an ASGI 3 application, served with ``app.run()``.
"""

import logging
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

from simplevc.config import AppConfig
from simplevc.context import autoescape_var, request_var, template_dir_var
from simplevc.controller.arguments import ArgumentResolver
from simplevc.controller.controller import Controller
from simplevc.controller.resolver import ControllerResolver
from simplevc.error.console import console_logger
from simplevc.error.renderer import ErrorRenderer, reason_phrase
from simplevc.errors import (
    ControllerNotFoundError,
    HTTPError,
    InvalidControllerShapeError,
    InvalidControllerTypeError,
    InvalidMethodError,
    NotInitializedError,
)
from simplevc.http.request import Request
from simplevc.http.response import Response
from simplevc.http.sessions import SessionConfig, SessionStore
from simplevc.routing.collection import RouteCollection
from simplevc.routing.context import RequestContext
from simplevc.routing.loader import load_routes
from simplevc.routing.router import Router
from simplevc.server.asgi import Receive, Scope, Send, read_body
from simplevc.server.sender import send_response

logger = logging.getLogger("simplevc.server")


class App:
    """The simplevc application.

    Routes are loaded and compiled once, at construction. After that the
    app holds no per-request state: controllers, views and routing
    contexts are created inside each ``handle()`` call.
    """

    __slots__ = (
        "_argument_resolver",
        "_controller_resolver",
        "_error_renderer",
        "_router",
        "_routes",
        "_sessions",
        "config",
    )

    def __init__(
        self,
        routes: RouteCollection | str | Path | None = None,
        *,
        config: AppConfig | None = None,
        error_renderer: ErrorRenderer | None = None,
        controller_resolver: ControllerResolver | None = None,
        argument_resolver: ArgumentResolver | None = None,
    ) -> None:
        self.config: AppConfig = config or AppConfig()

        self._routes = load_routes(routes if routes is not None else self.config.routes_file)
        self._router = Router.from_collection(self._routes)

        self._error_renderer = error_renderer or ErrorRenderer(
            console_logger(debug=self.config.debug),
            debug=self.config.debug,
            template_dir=self.config.template_dir,
        )
        self._controller_resolver = controller_resolver or ControllerResolver()
        self._argument_resolver = argument_resolver or ArgumentResolver()

        self._sessions: SessionStore | None = None
        if self.config.secret_key:
            self._sessions = SessionStore(
                SessionConfig(
                    secret_key=self.config.secret_key,
                    cookie_name=self.config.session_cookie,
                    max_age=self.config.session_max_age,
                )
            )

    @property
    def routes(self) -> RouteCollection:
        return self._routes

    @property
    def router(self) -> Router:
        return self._router

    @property
    def error_renderer(self) -> ErrorRenderer:
        return self._error_renderer

    # -- Dispatch --

    def handle(self, request: Request) -> Response:
        """Dispatch *request* and return its response. Never raises."""
        request_token = request_var.set(request)
        template_token = template_dir_var.set(self.config.template_dir)
        autoescape_token = autoescape_var.set(self.config.autoescape)
        try:
            try:
                response = self._dispatch(request)
                if self._sessions is not None and request.session is not None:
                    response = self._sessions.save(response, request.session)
            except Exception as exc:
                response = self.handle_exception(exc)
        finally:
            autoescape_var.reset(autoescape_token)
            template_dir_var.reset(template_token)
            request_var.reset(request_token)

        logger.debug("%s %s -> %d", request.method, request.path, response.status)
        return response

    def handle_exception(self, exc: Exception) -> Response:
        """Map *exc* to a status and render the error page for it."""
        status = exc.status if isinstance(exc, HTTPError) else 500

        try:
            response = self._error_renderer.render(status, exc)
        except Exception:
            logger.exception("error renderer failed for status %d", status)
            return Response(
                reason_phrase(status),
                status=status,
                content_type="text/plain; charset=utf-8",
            )

        if isinstance(exc, HTTPError):
            for name, value in exc.headers:
                response = response.with_header(name, value)
        return response

    def _dispatch(self, request: Request) -> Response:
        if self._sessions is not None:
            request.session = self._sessions.load(request)

        context = RequestContext().from_request(request)
        match = self._router.match_context(context)
        request.attributes.update(match.parameters)

        controller, method = self._resolve_controller(request)
        controller.view.set_request(request)

        kwargs = self._argument_resolver.get_arguments(request, method)
        result = method(**kwargs)

        if isinstance(result, Response):
            return result
        return controller.render()

    def _resolve_controller(self, request: Request) -> tuple[Controller, Callable[..., Any]]:
        """Return the controller instance and its bound action method.

        Raises:
            ControllerNotFoundError: No ``_controller`` attribute.
            InvalidControllerShapeError: Not a ``(controller, method)`` pair.
            InvalidControllerTypeError: The controller is not a ``Controller``.
            InvalidMethodError: The method is not a public callable.
        """
        resolved = self._controller_resolver.get_controller(request)
        if resolved is None:
            msg = f"No controller found for path {request.path!r}."
            raise ControllerNotFoundError(msg)

        if not isinstance(resolved, tuple) or len(resolved) != 2:
            msg = (
                "Invalid controller resolution. A controller method could not "
                "be resolved from the request."
            )
            raise InvalidControllerShapeError(msg)

        controller, method_name = resolved
        if not isinstance(controller, Controller):
            msg = f"Controller must extend `{Controller.__module__}.{Controller.__qualname__}`."
            raise InvalidControllerTypeError(msg)

        if not isinstance(method_name, str):
            msg = f"Controller method name must be a string, got {type(method_name).__name__}."
            raise InvalidMethodError(msg)

        method = getattr(controller, method_name, None)
        if method_name.startswith("_") or not callable(method):
            msg = f"`{type(controller).__name__}.{method_name}` is not a public controller method."
            raise InvalidMethodError(msg)

        return controller, method

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Serve the app with pounce (reloading when ``config.debug`` is on)."""
        from simplevc.server.dev import run_dev_server

        run_dev_server(
            self,
            host or self.config.host,
            port or self.config.port,
            reload=self.config.debug,
            log_level=self.config.log_level,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        HTTP requests are read in full, dispatched through ``handle()`` and
        sent back as one body. Lifespan events are acknowledged. Other
        scope types are ignored.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        if scope["type"] != "http":
            logger.debug("ignoring unsupported ASGI scope %r", scope["type"])
            return

        body = await read_body(receive)
        request = Request.from_asgi(scope, body)
        response = self.handle(request)
        await send_response(response, send, head=request.method == "HEAD")

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return


# -- Process-wide instance --

_instance: App | None = None
_instance_lock = threading.Lock()


def init(
    routes: RouteCollection | str | Path | None = None,
    **kwargs: Any,
) -> App:
    """Create the process-wide ``App`` on first call and return it.

    Later calls return the same instance and ignore their arguments.
    """
    global _instance
    if _instance is not None:
        return _instance
    with _instance_lock:
        if _instance is None:
            _instance = App(routes, **kwargs)
    return _instance


def get_instance() -> App:
    """Return the app created by ``init()``.

    Raises:
        NotInitializedError: If ``init()`` has not been called.
    """
    if _instance is None:
        msg = "Application not initialized. Call `simplevc.app.init()` first."
        raise NotInitializedError(msg)
    return _instance


def _reset_instance() -> None:
    """Forget the process-wide app. Test helper."""
    global _instance
    with _instance_lock:
        _instance = None
