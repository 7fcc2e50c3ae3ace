"""Result assembly — the value handed to the view layer.

Exactly one of (controller, action, params) or ``error`` is populated.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field

from routeprobe.errors import InvalidRoutesError, NoMatchingRouteError
from routeprobe.routing import Matched, NoMatch, build_table, match_outcome

NO_MATCH_MESSAGE = "doesn't match any of the route patterns above."
INVALID_ROUTES_PREFIX = (
    "can't be parsed because your routes table (top of page) seems to contain an error: "
)

# Methods whose requests carry a body; the form page flags these.
BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


@dataclass(frozen=True, slots=True)
class Result:
    """Outcome of one recognition request, ready for rendering."""

    route: str
    controller: str | None = None
    action: str | None = None
    params: dict[str, str] = field(default_factory=dict)
    error: str | None = None
    # Declaration line and ``as:`` name of the matched route.
    line: int | None = None
    name: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, object]:
        return {
            "route": self.route,
            "controller": self.controller,
            "action": self.action,
            "params": dict(self.params),
            "error": self.error,
            "line": self.line,
            "name": self.name,
        }


def describe_route(method: str, uri: str) -> str:
    """``"<METHOD> <URI>"`` using the user-supplied values."""
    return f"{method.strip().upper()} {uri}"


def assemble(
    method: str,
    uri: str,
    outcome: Matched | NoMatch | Mapping[str, str] | Exception,
) -> Result:
    """Package a match outcome (or an engine failure) as a ``Result``.

    Accepts a ``Matched``/``NoMatch`` outcome, the params mapping returned
    by ``recognize``, or an ``InvalidRoutesError``/``NoMatchingRouteError``.
    """
    route = describe_route(method, uri)

    if isinstance(outcome, InvalidRoutesError):
        return Result(route=route, error=INVALID_ROUTES_PREFIX + str(outcome))
    if isinstance(outcome, NoMatch | NoMatchingRouteError):
        return Result(route=route, error=NO_MATCH_MESSAGE)
    if isinstance(outcome, Exception):
        msg = f"cannot assemble a result from {type(outcome).__name__}"
        raise TypeError(msg) from outcome

    if isinstance(outcome, Matched):
        params = dict(outcome.params)
        line, name = outcome.pattern.line, outcome.pattern.name
    else:
        params = dict(outcome)
        line, name = None, None
    controller = params.pop("controller", "")
    action = params.pop("action", "")
    return Result(
        route=route,
        controller=controller,
        action=action,
        params=params,
        line=line,
        name=name,
    )


def describe(method: str, uri: str, routes_text: str) -> Result:
    """Build the table from *routes_text*, recognize the request, assemble.

    One full submission: exactly one of success, invalid table, or no
    match is reported.
    """
    try:
        table = build_table(routes_text)
    except InvalidRoutesError as exc:
        return assemble(method, uri, exc)
    return assemble(method, uri, match_outcome(table, method, uri))
