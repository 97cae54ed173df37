"""Metrics renderer adapters."""

from reqwatch.adapters.metrics_renderer.fake import FakeMetricsRenderer
from reqwatch.adapters.metrics_renderer.prometheus import PrometheusMetricsRenderer

__all__ = ["PrometheusMetricsRenderer", "FakeMetricsRenderer"]
