"""Request-scoped context via ContextVar.

Provides:
- ``request_var``: the ``Request`` currently being dispatched.
- ``template_dir_var``: the template directory of the dispatching app.
- ``autoescape_var``: whether that app's templates autoescape output.

All three are set by ``App.handle()`` and reset after each call. Views created
while a request is being handled pick up the app's template settings
without them being passed through every controller constructor.
"""

from contextvars import ContextVar
from pathlib import Path

from simplevc.env import env
from simplevc.http.request import Request

# -- Request context --

request_var: ContextVar[Request] = ContextVar("simplevc_request")
"""The current request. Set by the dispatcher before invoking a controller."""


def get_request() -> Request:
    """Return the current request.

    Raises ``LookupError`` if called outside a request context.
    """
    return request_var.get()


# -- Template directory --

template_dir_var: ContextVar[str | Path | None] = ContextVar(
    "simplevc_template_dir", default=None
)
"""Template directory of the app handling the current request."""


def get_template_dir() -> str | Path:
    """Return the active template directory.

    Falls back to the ``TEMPLATES`` environment variable, then
    ``"templates"`` relative to the working directory.
    """
    template_dir = template_dir_var.get()
    if template_dir is not None:
        return template_dir
    return str(env("TEMPLATES", "templates"))


autoescape_var: ContextVar[bool] = ContextVar("simplevc_autoescape", default=True)
"""Autoescape setting of the app handling the current request."""
