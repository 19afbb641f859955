"""Rose CLI — serve an app and inspect its route table.

Entry point registered as ``rose`` in ``pyproject.toml``::

    [project.scripts]
    rose = "rose.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``rose`` command."""
    parser = argparse.ArgumentParser(
        prog="rose",
        description="Rose — HTTP routing on a synchronous event bus.",
    )
    parser.add_argument(
        "--log-level",
        default="info",
        choices=["debug", "info", "warning", "error"],
        help="Logging level for rose's own loggers",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- rose run ---------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Serve an app")
    run_parser.add_argument("app", help="Import string (e.g. myapp:app)")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument("--workers", type=int, default=None, help="Worker count")

    # -- rose routes ------------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument("app", help="Import string (e.g. myapp:app)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "run":
        from rose.cli._run import run_app

        run_app(args)
    elif args.command == "routes":
        from rose.cli._routes import run_routes

        run_routes(args)
