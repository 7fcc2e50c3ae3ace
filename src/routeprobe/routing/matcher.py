"""Matcher — first-match-wins recognition against a ``RouteTable``.

Patterns are tried in declaration order. Each pattern is walked segment
by segment against the request path; optional segments backtrack
(one occurrence first, then zero).
"""

import logging

from routeprobe.errors import NoMatchingRouteError
from routeprobe.http.query import split_path, split_uri
from routeprobe.routing.segments import (
    NO_MATCH,
    Dynamic,
    Glob,
    Literal,
    Matched,
    MatchOutcome,
    Optional,
    ParsedRequest,
    RoutePattern,
    RouteTable,
    Segment,
)

logger = logging.getLogger("routeprobe.routing")


def parse_request(method: str, raw_uri: str) -> ParsedRequest:
    """Normalize *method* and split *raw_uri* into path components and query."""
    path, query = split_uri(raw_uri)
    return ParsedRequest(method=method.strip().upper(), path=split_path(path), query=query)


def match_outcome(table: RouteTable, method: str, raw_uri: str) -> MatchOutcome:
    """Match a request against *table*. Never raises.

    Params are merged with increasing precedence: pattern defaults, then
    path captures, then query parameters.
    """
    request = parse_request(method, raw_uri)
    for pattern in table:
        if not pattern.accepts(request.method):
            continue
        captures = match_pattern(pattern, request.path)
        if captures is None:
            continue
        logger.debug("%s %s matched line %d: %s", request.method, raw_uri, pattern.line, pattern)
        params = {**pattern.defaults, **captures, **request.query}
        return Matched(pattern=pattern, params=params)

    logger.debug("%s %s matched none of %d route(s)", request.method, raw_uri, len(table))
    return NO_MATCH


def recognize(table: RouteTable, method: str, raw_uri: str) -> dict[str, str]:
    """Return the merged params of the first matching pattern.

    Raises ``NoMatchingRouteError`` if no pattern matches.
    """
    outcome = match_outcome(table, method, raw_uri)
    if isinstance(outcome, Matched):
        return dict(outcome.params)
    raise NoMatchingRouteError(method.strip().upper(), raw_uri)


def match_pattern(pattern: RoutePattern, parts: tuple[str, ...]) -> dict[str, str] | None:
    """Match path components against one pattern's segments.

    Returns the path captures, or ``None`` if the pattern does not match.
    A trailing ``(.suffix)`` optional is tried against the last component
    split at its final ``.`` before it is tried as absent.
    """
    segments = pattern.segments
    if segments and isinstance(segments[-1], Optional) and segments[-1].separator == ".":
        suffix_seg = segments[-1]
        head = segments[:-1]
        if parts:
            stem, dot, suffix = parts[-1].rpartition(".")
            inner = _match_one(suffix_seg.inner, suffix) if dot and stem and suffix else None
            if inner is not None:
                captures = match_segments(head, (*parts[:-1], stem), 0, 0, {}, set())
                if captures is not None:
                    return {**captures, **inner}
        return match_segments(head, parts, 0, 0, {}, set())
    return match_segments(segments, parts, 0, 0, {}, set())


def match_segments(
    segments: tuple[Segment, ...],
    parts: tuple[str, ...],
    seg_index: int,
    part_index: int,
    captures: dict[str, str],
    failed: set[tuple[int, int]],
) -> dict[str, str] | None:
    """Recursively walk *segments* and *parts* in lockstep.

    Matches only if both sequences are fully consumed. *failed* records
    ``(seg_index, part_index)`` positions already known not to match;
    whether the rest of a pattern matches never depends on the captures
    taken so far, so each position is explored at most once.
    """
    if (seg_index, part_index) in failed:
        return None
    result = _walk(segments, parts, seg_index, part_index, captures, failed)
    if result is None:
        failed.add((seg_index, part_index))
    return result


def _walk(
    segments: tuple[Segment, ...],
    parts: tuple[str, ...],
    seg_index: int,
    part_index: int,
    captures: dict[str, str],
    failed: set[tuple[int, int]],
) -> dict[str, str] | None:
    if seg_index == len(segments):
        return captures if part_index == len(parts) else None

    seg = segments[seg_index]

    if isinstance(seg, Glob):
        return {**captures, seg.name: "/".join(parts[part_index:])}

    if isinstance(seg, Optional):
        # One occurrence first, then zero.
        if part_index < len(parts):
            taken = _match_one(seg.inner, parts[part_index])
            if taken is not None:
                result = match_segments(
                    segments, parts, seg_index + 1, part_index + 1, {**captures, **taken}, failed
                )
                if result is not None:
                    return result
        return match_segments(segments, parts, seg_index + 1, part_index, captures, failed)

    if part_index == len(parts):
        return None
    taken = _match_one(seg, parts[part_index])
    if taken is None:
        return None
    return match_segments(
        segments, parts, seg_index + 1, part_index + 1, {**captures, **taken}, failed
    )


def _match_one(seg: Literal | Dynamic, part: str) -> dict[str, str] | None:
    """Match a single component. Returns its capture (possibly empty) or ``None``."""
    if isinstance(seg, Literal):
        return {} if part == seg.text else None
    if part:
        return {seg.name: part}
    return None
