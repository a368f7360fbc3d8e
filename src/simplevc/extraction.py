"""Typed extraction of route attributes, query parameters and body data.

Controller method parameters annotated with a dataclass are populated
from the request: from the query string for GET and HEAD, from the form
or JSON body for POST, PUT, PATCH and DELETE.

Scalar values are converted to ``str``, ``int``, ``float`` or ``bool``
following the annotation. A value that does not convert is passed
through unchanged.
"""

import dataclasses
from collections.abc import Callable, Mapping
from typing import Any

_TRUE_STRINGS = frozenset({"true", "1", "yes", "on"})


def _to_str(value: Any) -> str:
    return value.strip() if isinstance(value, str) else str(value)


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.lower() in _TRUE_STRINGS
    return bool(value)


_CONVERTERS: dict[type, Callable[[Any], Any]] = {
    str: _to_str,
    int: int,
    float: float,
    bool: _to_bool,
}
_TYPES_BY_NAME = {t.__name__: t for t in _CONVERTERS}


def is_extractable_dataclass(annotation: Any) -> bool:
    """Return True if *annotation* is a user-defined dataclass type.

    simplevc's own dataclasses (``Request``, ``Response``, ``Route``...)
    are never populated from request data.
    """
    if not isinstance(annotation, type) or not dataclasses.is_dataclass(annotation):
        return False
    return not (annotation.__module__ or "").startswith("simplevc.")


def extract_dataclass[T](cls: type[T], data: Mapping[str, Any]) -> T:
    """Create a *cls* instance from *data* (query params, form, or JSON).

    Fields absent from *data* keep their defaults; a required field that
    is absent makes the constructor raise ``TypeError``.
    """
    kwargs = {
        f.name: convert_value(data[f.name], _TYPES_BY_NAME.get(f.type, f.type))
        for f in dataclasses.fields(cls)  # type: ignore[arg-type]
        if f.name in data
    }
    return cls(**kwargs)


def convert_value(value: Any, target_type: Any) -> Any:
    """Convert *value* to *target_type*, returning *value* unchanged on failure."""
    converter = _CONVERTERS.get(target_type) if isinstance(target_type, type) else None
    if converter is None:
        return value
    try:
        return converter(value)
    except (TypeError, ValueError):
        return value
