"""Prometheus instrumentation facade.

``Prometheus`` owns the registry, the request metrics, the renderer and the
reserved scrape path, and installs all of it on a Starlette or FastAPI app
in one call::

    registry = CollectorRegistry()
    prom = Prometheus("api", registry=registry)
    prom.use(app)

``middleware()`` is the shortcut for callers that only want the hook and
serve the registry some other way.
"""

from __future__ import annotations

from prometheus_client import CollectorRegistry
from starlette.applications import Starlette
from starlette.middleware import Middleware

from reqwatch.adapters.http_metrics import PrometheusHttpMetrics
from reqwatch.adapters.metrics_renderer import PrometheusMetricsRenderer
from reqwatch.api.metrics import MetricsServer, metrics_endpoint
from reqwatch.api.middleware import PrometheusMiddleware
from reqwatch.core.config import DEFAULT_METRICS_PATH
from reqwatch.core.logging import logger
from reqwatch.core.protocols.http_metrics import HttpMetrics
from reqwatch.core.protocols.metrics_renderer import MetricsRenderer


class Prometheus:
    """Request metrics for one subsystem plus the endpoint that serves them.

    ``metrics_path`` may be changed until ``use()`` is called; the hook and
    the scrape route read it at installation time.
    """

    http: HttpMetrics

    def __init__(self, subsystem: str = "", registry: CollectorRegistry | None = None) -> None:
        self.subsystem = subsystem
        self.registry = registry or CollectorRegistry()
        self.metrics_path = DEFAULT_METRICS_PATH
        self.http = PrometheusHttpMetrics(subsystem, registry=self.registry)
        self._renderer: MetricsRenderer = PrometheusMetricsRenderer(self.registry)
        self._server: MetricsServer | None = None

    def middleware(self) -> Middleware:
        """Return the instrumentation hook, ready for ``FastAPI(middleware=[...])``."""
        return Middleware(PrometheusMiddleware, metrics=self.http, metrics_path=self.metrics_path)

    def use(self, app: Starlette) -> None:
        """Install the instrumentation hook and the scrape route on ``app``."""
        app.add_middleware(PrometheusMiddleware, metrics=self.http, metrics_path=self.metrics_path)
        app.add_route(
            self.metrics_path,
            metrics_endpoint(self._renderer),
            methods=["GET"],
            include_in_schema=False,
        )
        logger.with_context(subsystem=self.subsystem, metrics_path=self.metrics_path).info(
            "Installed request instrumentation"
        )

    async def start_server(self, host: str = "0.0.0.0", port: int = 9090) -> MetricsServer:
        """Also serve the registry from a sidecar server on ``host:port``.

        A server started by an earlier call is stopped first.
        """
        await self.stop_server()
        self._server = MetricsServer(self._renderer, port, host, path=self.metrics_path)
        await self._server.start()
        return self._server

    async def stop_server(self) -> None:
        """Stop the sidecar server if one was started."""
        if self._server:
            await self._server.stop()
            self._server = None


def middleware(subsystem: str = "", registry: CollectorRegistry | None = None) -> Middleware:
    """Build a ``Prometheus`` for ``subsystem`` and return only its hook."""
    return Prometheus(subsystem, registry=registry).middleware()
