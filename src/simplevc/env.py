"""Environment variable access with default values and boolean coercion.

Usage::

    from simplevc.env import env

    debug = env("DEBUG", False)   # False when DEBUG is unset

Values are read from ``os.environ`` on every call, so tests can override
them with ``monkeypatch.setenv()``.
"""

import os
from typing import Any

_BOOLEAN_STRINGS: dict[str, bool] = {
    "true": True,
    "1": True,
    "false": False,
    "0": False,
}


def env(key: str, default: Any = None) -> Any:
    """Return the environment variable *key*, coerced where it has a known shape.

    - unset: *default*
    - ``"null"``: ``None``
    - ``"true"`` / ``"false"`` / ``"1"`` / ``"0"`` (any case): ``bool``
    - anything else: the raw string
    """
    value = os.environ.get(key)
    if value is None:
        return default
    if value == "null":
        return None
    coerced = _BOOLEAN_STRINGS.get(value.lower())
    if coerced is not None:
        return coerced
    return value


def debug_enabled() -> bool:
    """True when ``DEBUG`` is set to a truthy boolean string."""
    return env("DEBUG", False) is True
