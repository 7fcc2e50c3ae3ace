"""Routeprobe CLI — web server and one-shot recognition.

Entry point registered as ``routeprobe`` in ``pyproject.toml``::

    [project.scripts]
    routeprobe = "routeprobe.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``routeprobe`` command."""
    parser = argparse.ArgumentParser(
        prog="routeprobe",
        description="Routeprobe — see which route in a routes table a request matches.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (debug, info, warning, ...)",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- routeprobe run ---------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start the recognizer web app")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable auto-reload and tracebacks in error pages",
    )

    # -- routeprobe recognize ---------------------------------------------
    rec_parser = subparsers.add_parser(
        "recognize", help="Match one request against a routes file"
    )
    rec_parser.add_argument("routes", help="Routes table file ('-' for stdin)")
    rec_parser.add_argument("method", help="HTTP method (GET, POST, ...)")
    rec_parser.add_argument("uri", help="Request URI, optionally with a query string")
    rec_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from routeprobe.cli._run import run_server

        run_server(args)
    elif args.command == "recognize":
        from routeprobe.cli._recognize import run_recognize

        run_recognize(args)
