"""Wordchain CLI: run the service, inspect the route tree.

Entry point registered as ``wordchain`` in ``pyproject.toml``::

    [project.scripts]
    wordchain = "wordchain.cli:main"
"""

import argparse
import sys


def _add_config_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Read variables from this dotenv file first (default: .env)",
    )
    parser.add_argument("--database", default=None, help="Database URL (overrides DATABASE)")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``wordchain`` command."""
    parser = argparse.ArgumentParser(
        prog="wordchain",
        description="Wordchain: accounts with encrypted session cookies.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- wordchain run ----------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start the server")
    _add_config_arguments(run_parser)
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument(
        "--insecure-cookies",
        action="store_true",
        help="Send session cookies without the Secure flag (local HTTP only)",
    )
    run_parser.add_argument(
        "--cors",
        action="store_true",
        help="Add permissive Access-Control-Allow-* headers to every response",
    )
    run_parser.add_argument(
        "--keep-data",
        action="store_true",
        help="Do not drop the accounts table on shutdown",
    )
    run_parser.add_argument(
        "--log-format",
        choices=("text", "json"),
        default=None,
        help="Log line format (overrides LOG_FORMAT)",
    )

    # -- wordchain routes -------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="Print the route tree")
    _add_config_arguments(routes_parser)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from wordchain.cli._run import run_server

        run_server(args)
    elif args.command == "routes":
        from wordchain.cli._routes import run_routes

        run_routes(args)
