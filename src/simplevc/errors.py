"""simplevc exception hierarchy.

Shared across the router, views, controllers and the dispatcher so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class SimpleVCError(Exception):
    """Base for all simplevc-specific errors."""


class ConfigurationError(SimpleVCError):
    """Raised when construction-time input is invalid.

    Missing template directory, unreadable routes file, a routes file that
    does not define a ``RouteCollection``. Never mapped to an HTTP response.
    """


class NotInitializedError(SimpleVCError):
    """Raised by ``get_instance()`` before ``init()`` has been called."""


# -- HTTP --


@dataclass(frozen=True, slots=True)
class HTTPError(SimpleVCError):
    """An error that maps directly to an HTTP status code.

    Raised by the router or by controller code. The dispatcher catches
    these and renders the error page with ``status``.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class RouteNotFoundError(HTTPError):
    """404 — no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """405 — route exists but not for this HTTP method.

    Includes an ``Allow`` header listing the valid methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )


# -- Dispatch --


class DispatchError(SimpleVCError):
    """Base for failures resolving or invoking a controller method."""


class ControllerNotFoundError(DispatchError):
    """The request carries no resolvable ``_controller`` attribute."""


class InvalidControllerShapeError(DispatchError):
    """The controller reference is not a ``(controller, method)`` pair."""


class InvalidControllerTypeError(DispatchError):
    """The resolved controller is not a ``Controller`` instance."""


class InvalidMethodError(DispatchError):
    """The method name is not a string or names no public callable."""


class ArgumentResolutionError(DispatchError):
    """A required controller method argument has no value in the request."""


# -- View --


class ViewError(SimpleVCError):
    """Base for template-rendering failures."""


class DuplicateKeyError(ViewError):
    """A data bag key was set twice."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Data key `{key}` already exists.")


class MissingRequestError(ViewError):
    """Template auto-detection was attempted before ``set_request()``."""


class MissingControllerInfoError(ViewError):
    """The request has no ``_controller`` attribute to derive a template from."""


class TemplateNotFoundError(ViewError):
    """A template file does not exist under the template directory."""


class TemplateRenderError(ViewError):
    """A template failed to produce string output."""
