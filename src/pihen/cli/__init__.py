"""Pihen CLI — serve a router or list what it binds.

Entry point registered as ``pihen`` in ``pyproject.toml``::

    [project.scripts]
    pihen = "pihen.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``pihen`` command."""
    parser = argparse.ArgumentParser(
        prog="pihen",
        description="Pihen: JSON collections over HTTP with CORS.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- pihen run --------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Serve a router")
    run_parser.add_argument("router", help="Import string (e.g. myapi:router)")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument(
        "--reload",
        action="store_true",
        help="Restart the server when code changes",
    )

    # -- pihen routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List bound collections")
    routes_parser.add_argument("router", help="Import string (e.g. myapi:router)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from pihen.cli._run import run_server

        run_server(args)
    elif args.command == "routes":
        from pihen.cli._routes import run_routes

        run_routes(args)
