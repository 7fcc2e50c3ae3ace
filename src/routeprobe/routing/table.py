"""Route table builder — DSL text to an ordered ``RouteTable``."""

import logging

from routeprobe.errors import InvalidRoutesError, RouteSyntaxError
from routeprobe.routing.compiler import compile_line, strip_comment
from routeprobe.routing.segments import RoutePattern, RouteTable

logger = logging.getLogger("routeprobe.routing")


def iter_declarations(text: str) -> list[tuple[int, str]]:
    """Return ``(lineno, line)`` for every line that holds a declaration.

    Blank lines and ``#`` comment lines are skipped; line numbers refer to
    the raw text so error messages point at what the user typed.
    """
    return [
        (lineno, line)
        for lineno, line in enumerate(text.splitlines(), start=1)
        if strip_comment(line).strip()
    ]


def build_table(text: str) -> RouteTable:
    """Compile *text* into a ``RouteTable``, preserving declaration order.

    Empty or whitespace-only text yields an empty table.

    Raises ``InvalidRoutesError`` wrapping the first ``RouteSyntaxError``
    (by line order). No partial table is ever returned.
    """
    patterns: list[RoutePattern] = []
    for lineno, line in iter_declarations(text):
        try:
            patterns.append(compile_line(line, lineno))
        except RouteSyntaxError as exc:
            raise InvalidRoutesError.from_syntax_error(exc) from exc

    logger.debug("compiled %d route(s)", len(patterns))
    return RouteTable(tuple(patterns))
