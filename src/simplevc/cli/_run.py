"""``simplevc run``: start the pounce development server."""

import argparse
import sys

from simplevc.cli._resolve import resolve_app
from simplevc.errors import ConfigurationError


def run_server(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` and serve it.

    ``--host`` and ``--port`` override the app config.
    """
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    from simplevc.server.dev import run_dev_server

    run_dev_server(
        app,
        args.host or app.config.host,
        args.port or app.config.port,
        reload=app.config.debug,
        log_level=app.config.log_level,
        app_path=args.app,
    )
