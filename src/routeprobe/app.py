"""Routeprobe application class.

Frozen on first use: the site's own routes table and the kida
environment are compiled once and shared read-only by every request.
"""

import logging
import threading

from kida import Environment

from routeprobe._internal.asgi import Receive, Scope, Send
from routeprobe.config import AppConfig
from routeprobe.errors import ConfigurationError
from routeprobe.routing import RouteTable, build_table
from routeprobe.server.handler import handle_request
from routeprobe.templating.integration import create_environment
from routeprobe.views import PAGES, PageContext, PageHandler

logger = logging.getLogger("routeprobe.server")

# The site dispatches its own pages through the same engine it exposes.
SITE_ROUTES = """\
get /, to: 'pages#form'
post /, to: 'pages#recognize'
"""


class App:
    """The routeprobe ASGI application.

    Serves the recognizer form on ``GET /`` and the recognition result on
    ``POST /``. Each submission builds and discards its own ``RouteTable``;
    nothing submitted by one user is visible to another.

    Thread safety:
        The freeze transition uses a Lock + double-check to ensure exactly
        one thread compiles the app, even when multiple ASGI workers call
        ``__call__()`` concurrently on first request.
    """

    __slots__ = (
        "_ctx",
        "_custom_kida_env",
        "_freeze_lock",
        "_frozen",
        "_pages",
        "_site",
        "config",
    )

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        kida_env: Environment | None = None,
        pages: dict[str, PageHandler] | None = None,
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        self._custom_kida_env: Environment | None = kida_env
        self._pages: dict[str, PageHandler] = {**PAGES, **(pages or {})}
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state, set during _freeze()
        self._site: RouteTable | None = None
        self._ctx: PageContext | None = None

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Compile the app and serve it with pounce.

        Auto-reload is enabled when ``config.debug`` is set.
        """
        self._ensure_frozen()

        from routeprobe.server.dev import run_dev_server

        run_dev_server(
            self,
            host or self.config.host,
            port or self.config.port,
            reload=self.config.debug,
            reload_include=self.config.reload_include,
            reload_dirs=self.config.reload_dirs,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()

        assert self._site is not None
        assert self._ctx is not None

        await handle_request(
            scope,
            receive,
            send,
            site=self._site,
            pages=self._pages,
            ctx=self._ctx,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app at startup so template or site-table errors
        surface before the first request.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self._ensure_frozen()
                except Exception as exc:
                    logger.exception("startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        site = build_table(SITE_ROUTES)
        for pattern in site:
            target = f"{pattern.defaults['controller']}#{pattern.defaults['action']}"
            if target not in self._pages:
                msg = f"No page handler registered for {target!r} (line {pattern.line})"
                raise ConfigurationError(msg)

        kida_env = self._custom_kida_env or create_environment(self.config)
        self._site = site
        self._ctx = PageContext(config=self.config, kida_env=kida_env)
        self._frozen = True
        logger.debug("app frozen with %d site route(s)", len(site))
