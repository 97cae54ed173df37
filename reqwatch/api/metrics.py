"""Serving the collected metrics to a scraper.

Two surfaces share one MetricsRenderer: a Starlette endpoint mounted on the
instrumented application itself, and an optional aiohttp sidecar that
listens on its own port so scrapes never compete with application traffic.
"""

from typing import Optional

from aiohttp import web
from starlette.requests import Request
from starlette.responses import Response

from reqwatch.core.logging import logger
from reqwatch.core.protocols.metrics_renderer import MetricsRenderer


def metrics_endpoint(renderer: MetricsRenderer):
    """Build a Starlette endpoint that serves ``renderer``'s output."""

    async def metrics(request: Request) -> Response:
        return Response(renderer.generate(), media_type=renderer.content_type)

    return metrics


class MetricsServer:
    """Sidecar aiohttp server exposing ``GET /metrics``."""

    def __init__(
        self,
        renderer: MetricsRenderer,
        port: int,
        host: str = "0.0.0.0",
        path: str = "/metrics",
    ) -> None:
        """Initialize the metrics server.

        Args:
            renderer: Serializes the registry on every scrape.
            port: The port to listen on. ``0`` lets the OS pick one.
            host: The host to listen on.
            path: The path the exposition is served on.
        """
        self._renderer = renderer
        self.host = host
        self.port = port
        self.path = path
        self.app = web.Application()
        self.app.add_routes([web.get(path, self._handle_metrics)])
        self._runner: Optional[web.AppRunner] = None
        self._site: Optional[web.TCPSite] = None
        self.logger = logger.with_context(operation="metrics_server", path=path)

    async def _handle_metrics(self, request: web.Request) -> web.Response:
        body = self._renderer.generate()
        # aiohttp rejects a charset inside content_type, so pass the full header.
        return web.Response(body=body, headers={"Content-Type": self._renderer.content_type})

    @property
    def bound_port(self) -> Optional[int]:
        """Port actually bound by the running server, or None before start()."""
        if self._site is None or self._site._server is None:
            return None
        return self._site._server.sockets[0].getsockname()[1]

    async def start(self) -> None:
        """Start serving in the background of the current event loop."""
        self._runner = web.AppRunner(self.app)
        await self._runner.setup()
        self._site = web.TCPSite(self._runner, host=self.host, port=self.port)
        await self._site.start()
        self.logger.info(f"Metrics server listening on http://{self.host}:{self.bound_port}{self.path}")

    async def stop(self) -> None:
        """Stop the server gracefully; a no-op when it was never started."""
        if self._site:
            await self._site.stop()
            self._site = None
        if self._runner:
            await self._runner.cleanup()
            self._runner = None
            self.logger.info("Metrics server stopped")
