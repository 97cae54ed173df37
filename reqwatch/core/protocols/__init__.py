"""Core protocols for dependency injection."""

from reqwatch.core.protocols.http_metrics import HttpMetrics
from reqwatch.core.protocols.metrics_renderer import MetricsRenderer

__all__ = [
    "HttpMetrics",
    "MetricsRenderer",
]
