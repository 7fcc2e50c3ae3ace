"""Page handlers for the recognizer site.

Each handler receives the request and the per-app ``PageContext`` and
returns a ``Response``. Handlers are looked up by the ``controller#action``
the site's own routes table resolves to.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from kida import Environment

from routeprobe.config import AppConfig
from routeprobe.errors import HTTPError
from routeprobe.http.request import Request
from routeprobe.http.response import Response
from routeprobe.result import BODY_METHODS, Result, describe
from routeprobe.templating.integration import render_template

logger = logging.getLogger("routeprobe.server")

# Method choices offered by the form, in display order.
FORM_METHODS: tuple[str, ...] = ("GET", "POST", "PUT", "PATCH", "DELETE")


@dataclass(frozen=True, slots=True)
class PageContext:
    """Everything a page handler needs beyond the request."""

    config: AppConfig
    kida_env: Environment


PageHandler = Callable[[Request, PageContext], Awaitable[Response]]


def _render(
    ctx: PageContext,
    *,
    routes: str,
    method: str,
    uri: str,
    result: Result | None = None,
) -> Response:
    body = render_template(
        ctx.kida_env,
        "main.html",
        {
            "routes": routes,
            "method": method,
            "uri": uri,
            "methods": FORM_METHODS,
            "result": result,
            "param_rows": sorted(result.params.items()) if result else [],
            "is_post": method in BODY_METHODS,
        },
    )
    return Response(body=body)


def _wants_json(request: Request) -> bool:
    return "application/json" in (request.headers.get("accept") or "")


async def form_page(request: Request, ctx: PageContext) -> Response:
    """The empty form, pre-filled with the configured example table."""
    return _render(
        ctx,
        routes=ctx.config.default_routes,
        method=ctx.config.default_method,
        uri=ctx.config.default_uri,
    )


async def recognize_page(request: Request, ctx: PageContext) -> Response:
    """Recognize the submitted method and URI against the submitted table.

    The typed table is rendered back so the user can edit it.
    """
    try:
        form = await request.form()
    except ValueError as exc:
        raise HTTPError(status=400, detail=str(exc)) from exc

    routes = form.get("routes_table_text") or ""
    method = (form.get("route_method") or "GET").strip().upper()
    uri = (form.get("route_uri") or "").strip()

    result = describe(method, uri, routes)
    logger.info("::%s::%s", result.route, routes.replace("\r\n", "\n").replace("\n", " ; "))

    if _wants_json(request):
        return Response.json(result.to_dict())
    return _render(ctx, routes=routes, method=method, uri=uri, result=result)


PAGES: dict[str, PageHandler] = {
    "pages#form": form_page,
    "pages#recognize": recognize_page,
}
