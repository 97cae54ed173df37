"""HTTP metrics adapters."""

from reqwatch.adapters.http_metrics.fake import FakeHttpMetrics
from reqwatch.adapters.http_metrics.prometheus import PrometheusHttpMetrics, register_or_get

__all__ = ["PrometheusHttpMetrics", "FakeHttpMetrics", "register_or_get"]
