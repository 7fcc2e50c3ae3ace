"""Request handling pipeline.

Resolves the request against the site's own routes table, invokes the
page handler, and maps errors to responses.
"""

from routeprobe._internal.asgi import Receive, Scope, Send
from routeprobe.errors import HTTPError, MethodNotAllowed, NotFound
from routeprobe.http.query import split_path
from routeprobe.http.request import Request
from routeprobe.http.response import Response
from routeprobe.routing.matcher import match_pattern
from routeprobe.routing.segments import ANY, HTTP_METHODS, RouteTable
from routeprobe.server.errors import handle_http_error, handle_internal_error
from routeprobe.server.sender import send_response
from routeprobe.views import PageContext, PageHandler


def allowed_methods(site: RouteTable, parts: tuple[str, ...]) -> frozenset[str]:
    """Methods for which some pattern in *site* matches *parts*."""
    allowed: set[str] = set()
    for pattern in site:
        if match_pattern(pattern, parts) is not None:
            allowed |= HTTP_METHODS if pattern.method == ANY else {pattern.method}
    return frozenset(allowed)


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    site: RouteTable,
    pages: dict[str, PageHandler],
    ctx: PageContext,
) -> None:
    """Process a single HTTP request through the pipeline."""
    request = Request.from_asgi(
        scope, receive, max_body_size=ctx.config.max_content_length
    )
    debug = ctx.config.debug

    try:
        response = await _dispatch(request, site, pages, ctx)
    except HTTPError as exc:
        response = handle_http_error(exc, request, debug)
    except Exception as exc:
        response = handle_internal_error(exc, request, debug)

    await send_response(response, send, head=request.method.upper() == "HEAD")


async def _dispatch(
    request: Request,
    site: RouteTable,
    pages: dict[str, PageHandler],
    ctx: PageContext,
) -> Response:
    # request.path is already percent-decoded, so it is split as a path
    # only; a decoded "?" must not be read as a query string.
    parts = split_path(request.path)
    method = request.method.upper()
    for pattern in site:
        if pattern.accepts(method) and match_pattern(pattern, parts) is not None:
            target = f"{pattern.defaults['controller']}#{pattern.defaults['action']}"
            return await pages[target](request, ctx)

    allowed = allowed_methods(site, parts)
    if allowed:
        raise MethodNotAllowed(allowed)
    raise NotFound(f"No page matches {request.method} {request.path!r}")
