"""``routeprobe recognize`` — one submission from the command line.

Reads a routes table from a file (or stdin), recognizes one request,
and prints the result. Exits 1 when the table is invalid or nothing
matches.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from routeprobe.result import Result, describe


def format_result(result: Result) -> str:
    """Human-readable rendering of a ``Result``."""
    lines = [result.route]
    if result.error is not None:
        lines.append(f"  {result.error}")
        return "\n".join(lines)
    lines.append(f"  controller: {result.controller}")
    lines.append(f"  action:     {result.action}")
    if result.line is not None:
        lines.append(f"  line:       {result.line}")
    if result.name:
        lines.append(f"  name:       {result.name}")
    if result.params:
        width = max(len(name) for name in result.params)
        lines.append("  params:")
        lines.extend(
            f"    {name.ljust(width)} = {value}" for name, value in sorted(result.params.items())
        )
    else:
        lines.append("  params:     (none)")
    return "\n".join(lines)


def run_recognize(args: argparse.Namespace) -> None:
    """Recognize ``args.method`` + ``args.uri`` against ``args.routes``."""
    if args.log_level:
        logging.basicConfig(level=args.log_level.upper(), stream=sys.stderr)

    try:
        if args.routes == "-":
            routes = sys.stdin.read()
        else:
            routes = Path(args.routes).read_text(encoding="utf-8")
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc

    result = describe(args.method, args.uri, routes)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(format_result(result))

    if not result.ok:
        raise SystemExit(1)
