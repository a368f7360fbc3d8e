"""simplevc CLI: dev server and route listing.

Entry point registered as ``simplevc`` in ``pyproject.toml``::

    [project.scripts]
    simplevc = "simplevc.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``simplevc`` command."""
    parser = argparse.ArgumentParser(
        prog="simplevc",
        description="simplevc: a lightweight controller and view layer.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- simplevc run -----------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start the development server")
    run_parser.add_argument(
        "app",
        help="Import string (e.g. myapp:app)",
    )
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")

    # -- simplevc routes --------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List the app's routes")
    routes_parser.add_argument(
        "app",
        help="Import string (e.g. myapp:app)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from simplevc.cli._run import run_server

        run_server(args)
    elif args.command == "routes":
        from simplevc.cli._routes import run_routes

        run_routes(args)
