"""Instrumented FastAPI application factory.

Run with ``uvicorn reqwatch.api.main:create_app --factory``.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from prometheus_client import CollectorRegistry

from reqwatch.core.config import Settings
from reqwatch.core.logging import configure_logging
from reqwatch.instrument import Prometheus


def create_app(
    settings: Optional[Settings] = None,
    registry: Optional[CollectorRegistry] = None,
) -> FastAPI:
    """Create a FastAPI app with request metrics installed.

    Settings are read from the environment only when none are passed. The
    sidecar metrics server, when enabled, lives for the duration of the app
    lifespan.
    """
    settings = settings or Settings()
    logger = configure_logging(settings)
    prometheus = Prometheus(settings.METRICS_SUBSYSTEM, registry=registry)
    prometheus.metrics_path = settings.METRICS_PATH

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if settings.METRICS_SIDECAR_ENABLED:
            await prometheus.start_server(settings.METRICS_HOST, settings.METRICS_PORT)
        try:
            yield
        finally:
            await prometheus.stop_server()

    app = FastAPI(title="reqwatch", lifespan=lifespan)
    app.state.prometheus = prometheus

    @app.get("/health", name="HandleHealth")
    async def health_check() -> dict[str, str]:
        """Check if the API is healthy."""
        return {"status": "healthy"}

    prometheus.use(app)
    logger.with_context(sidecar=settings.METRICS_SIDECAR_ENABLED).info("Application created")
    return app
