"""Kida environment setup.

Views render through a kida ``Environment`` bound to their template
directory. Environments are cached per directory and option set, so the
per-request views of one app share compiled templates.
"""

from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any

from kida import Environment, FileSystemLoader
from kida.template import Markup

__all__ = ["Markup", "create_environment", "get_environment", "is_template_error", "render_template"]


def create_environment(
    template_dir: str | Path,
    *,
    autoescape: bool = True,
    auto_reload: bool = True,
) -> Environment:
    """Create a kida Environment that loads templates from *template_dir*."""
    return Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=autoescape,
        auto_reload=auto_reload,
        trim_blocks=True,
        lstrip_blocks=True,
    )


@lru_cache(maxsize=32)
def _cached_environment(template_dir: str, autoescape: bool) -> Environment:
    return create_environment(template_dir, autoescape=autoescape)


def get_environment(template_dir: str | Path, *, autoescape: bool = True) -> Environment:
    """Return the shared environment for *template_dir*."""
    return _cached_environment(str(Path(template_dir).resolve()), autoescape)


def render_template(env: Environment, name: str, context: Mapping[str, Any]) -> Any:
    """Render template *name* with *context*.

    Returns whatever the engine produced; callers check it is a string.
    """
    template = env.get_template(name)
    return template.render(dict(context))


def is_template_error(exc: BaseException) -> bool:
    """Check if an exception originates from the kida template engine."""
    module = type(exc).__module__ or ""
    return "kida" in module
