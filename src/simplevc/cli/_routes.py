"""``simplevc routes``: list an app's routes."""

import argparse
import sys
from typing import Any

from simplevc.cli._resolve import resolve_app
from simplevc.errors import ConfigurationError
from simplevc.view.naming import split_controller_reference


def describe_controller(reference: Any) -> str:
    """``(UserController, "show")`` -> ``"app.controllers.UserController::show"``."""
    parts = split_controller_reference(reference)
    if parts is None:
        return "-" if reference is None else str(reference)

    controller, method = parts
    if isinstance(controller, str):
        name = controller
    else:
        cls = controller if isinstance(controller, type) else type(controller)
        name = f"{cls.__module__}.{cls.__qualname__}"
    return f"{name}::{method}"


def run_routes(args: argparse.Namespace) -> None:
    """Print a METHOD / PATH / NAME / CONTROLLER table of the app's routes."""
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    routes = list(app.routes)
    if not routes:
        print("No routes registered.")
        return

    rows: list[tuple[str, str, str, str]] = [
        (
            ", ".join(sorted(route.methods)) or "ANY",
            route.path,
            route.name or "",
            describe_controller(route.controller),
        )
        for route in routes
    ]

    headers = ("METHOD", "PATH", "NAME", "CONTROLLER")
    widths = [max(len(headers[i]), *(len(r[i]) for r in rows)) for i in range(3)]

    fmt = f"{{:<{widths[0]}}}  {{:<{widths[1]}}}  {{:<{widths[2]}}}  {{}}"
    print(fmt.format(*headers))
    sep_len = sum(widths) + 6 + max(len(r[3]) for r in rows)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(fmt.format(*row))
