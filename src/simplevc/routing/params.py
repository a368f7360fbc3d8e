"""Placeholder types for route paths.

``{name}`` matches one path segment, ``{name:int}`` digits only,
``{name:float}`` a decimal number and ``{name:path}`` the rest of the
path, slashes included. Matched values stay strings in
``request.attributes``; controller method annotations convert them.
"""

import re
from functools import cache

PLACEHOLDER_PATTERNS: dict[str, str] = {
    "str": r"[^/]+",
    "int": r"\d+",
    "float": r"\d+(?:\.\d+)?",
    "path": r".+",
}

CATCH_ALL = "path"


def is_placeholder_type(name: str) -> bool:
    return name in PLACEHOLDER_PATTERNS


@cache
def segment_regex(param_type: str) -> re.Pattern[str]:
    """Regex a whole segment must ``fullmatch`` for *param_type*.

    Raises ``KeyError`` for an unknown placeholder type.
    """
    return re.compile(PLACEHOLDER_PATTERNS[param_type])
