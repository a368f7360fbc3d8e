"""Template name derivation from controller references.

A controller reference is what routes carry under ``_controller``:
a ``(controller, method)`` pair or a ``"Identifier::method"`` string.
The controller may be a class, an instance, or a dotted/backslashed
identifier string.
"""

import re
from typing import Any

_LOWER_UPPER_RE = re.compile(r"([a-z\d])([A-Z])")
_ACRONYM_RE = re.compile(r"([A-Z]+)([A-Z][a-z])")
_QUALIFIER_RE = re.compile(r"[\\/.:]")


def camel_to_snake(text: str) -> str:
    """Convert ``camelCase`` to ``snake_case``.

    Acronym runs stay together::

        camel_to_snake("convertPDFToImage")  # "convert_pdf_to_image"
        camel_to_snake("HTMLParser")         # "html_parser"
    """
    result = _LOWER_UPPER_RE.sub(r"\1_\2", text)
    result = _ACRONYM_RE.sub(r"\1_\2", result)
    return result.lower()


def split_controller_reference(reference: Any) -> tuple[Any, Any] | None:
    """Split a ``_controller`` value into ``(controller, method)``.

    Returns ``None`` when the value has neither shape.
    """
    if isinstance(reference, str):
        controller, sep, method = reference.rpartition("::")
        if not sep or not controller or not method:
            return None
        return controller, method
    if isinstance(reference, (tuple, list)) and len(reference) == 2:
        return reference[0], reference[1]
    return None


def controller_name(controller: Any) -> str:
    """Short controller name: last qualifier segment, ``"Controller"`` removed.

    ``"App\\\\Controller\\\\AdminController"`` and ``AdminController`` both give
    ``"Admin"``; ``APIController`` gives ``"API"``.
    """
    if isinstance(controller, str):
        identifier = controller
    elif isinstance(controller, type):
        identifier = controller.__name__
    else:
        identifier = type(controller).__name__
    last = _QUALIFIER_RE.split(identifier)[-1]
    return last.replace("Controller", "")


def template_name(controller: Any, method: str, extension: str = ".html") -> str:
    """``"{ControllerName}/{snake_method}{extension}"``."""
    return f"{controller_name(controller)}/{camel_to_snake(method)}{extension}"
