"""Routing — route DSL compilation and first-match-wins recognition.

A routes table is compiled into an immutable ``RouteTable`` once per
submission and matched against one request.
"""

from routeprobe.routing.compiler import compile_line, parse_path
from routeprobe.routing.matcher import match_outcome, parse_request, recognize
from routeprobe.routing.segments import (
    ANY,
    NO_MATCH,
    Dynamic,
    Glob,
    Literal,
    Matched,
    MatchOutcome,
    NoMatch,
    Optional,
    ParsedRequest,
    RoutePattern,
    RouteTable,
    Segment,
)
from routeprobe.routing.table import build_table

__all__ = [
    "ANY",
    "NO_MATCH",
    "Dynamic",
    "Glob",
    "Literal",
    "MatchOutcome",
    "Matched",
    "NoMatch",
    "Optional",
    "ParsedRequest",
    "RoutePattern",
    "RouteTable",
    "Segment",
    "build_table",
    "compile_line",
    "match_outcome",
    "parse_path",
    "parse_request",
    "recognize",
]
