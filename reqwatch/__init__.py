"""Prometheus request instrumentation for Starlette and FastAPI."""

from reqwatch.api.middleware import PrometheusMiddleware
from reqwatch.core.config import DEFAULT_METRICS_PATH
from reqwatch.core.exceptions import MetricsRegistrationError
from reqwatch.core.request_size import compute_approximate_request_size
from reqwatch.instrument import Prometheus, middleware

__all__ = [
    "DEFAULT_METRICS_PATH",
    "MetricsRegistrationError",
    "Prometheus",
    "PrometheusMiddleware",
    "compute_approximate_request_size",
    "middleware",
]
