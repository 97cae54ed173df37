"""Prometheus-backed MetricsRenderer for reqwatch.

Turns the registry that holds the request counter and summaries into the
text exposition served on the scrape route and by the sidecar server.
"""

from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest

from reqwatch.core.protocols.metrics_renderer import MetricsRenderer


class PrometheusMetricsRenderer(MetricsRenderer):
    """Serve the exposition of the registry a Prometheus facade owns."""

    def __init__(self, registry: CollectorRegistry) -> None:
        self._registry = registry

    @property
    def content_type(self) -> str:
        return CONTENT_TYPE_LATEST

    def generate(self) -> bytes:
        return generate_latest(self._registry)
