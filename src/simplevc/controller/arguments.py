"""Controller method argument resolution.

Inspects the method signature and fills each parameter from the request.
Resolution order per parameter:

1. ``request`` (by name or ``Request`` annotation)
2. ``session`` (by name or ``Session`` annotation)
3. Request attributes by name: path parameters and route defaults,
   converted to the annotated type where it is ``int``/``float``/``bool``/``str``
4. Typed extraction (dataclass annotation from the query string or body)
5. The parameter's default value

A required parameter left without a value raises ``ArgumentResolutionError``.
"""

import inspect
from collections.abc import Callable
from typing import Any

from simplevc.errors import ArgumentResolutionError
from simplevc.extraction import convert_value, extract_dataclass, is_extractable_dataclass
from simplevc.http.request import Request
from simplevc.http.sessions import Session

_BODY_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


class ArgumentResolver:
    """Build the keyword arguments for a controller method call."""

    __slots__ = ()

    def get_arguments(self, request: Request, method: Callable[..., Any]) -> dict[str, Any]:
        """Return the kwargs to call *method* with for *request*.

        Raises:
            ArgumentResolutionError: If a required parameter cannot be
                filled, or a dataclass parameter cannot be built from the
                request data.
        """
        sig = inspect.signature(method, eval_str=True)
        kwargs: dict[str, Any] = {}
        body_data: dict[str, Any] | None = None

        for name, param in sig.parameters.items():
            if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
                continue

            annotation = param.annotation

            if name == "request" or annotation is Request:
                kwargs[name] = request
            elif name == "session" or annotation is Session:
                kwargs[name] = request.session
            elif name in request.attributes and not name.startswith("_"):
                value = request.attributes[name]
                if annotation is not inspect.Parameter.empty:
                    value = convert_value(value, annotation)
                kwargs[name] = value
            elif is_extractable_dataclass(annotation):
                if request.method in _BODY_METHODS:
                    if body_data is None:
                        body_data = _read_body(request)
                    source: Any = body_data
                else:
                    source = request.query
                try:
                    kwargs[name] = extract_dataclass(annotation, source)
                except TypeError as exc:
                    msg = _describe(method, name, f"could not be built from request data: {exc}")
                    raise ArgumentResolutionError(msg) from exc
            elif param.default is inspect.Parameter.empty:
                msg = _describe(method, name, "has no value in the request and no default")
                raise ArgumentResolutionError(msg)

        return kwargs


def _read_body(request: Request) -> dict[str, Any]:
    """Parse the request body as JSON or urlencoded form data."""
    ct = request.content_type or ""
    try:
        if "json" in ct:
            data = request.json()
            return data if isinstance(data, dict) else {}
        return dict(request.form())
    except ValueError as exc:
        msg = f"Request body could not be parsed as {ct or 'form data'}: {exc}"
        raise ArgumentResolutionError(msg) from exc


def _describe(method: Callable[..., Any], name: str, problem: str) -> str:
    qualname = getattr(method, "__qualname__", repr(method))
    return f"Argument `{name}` of `{qualname}()` {problem}."
