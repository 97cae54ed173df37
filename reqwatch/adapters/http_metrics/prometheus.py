"""Prometheus implementation of the HttpMetrics protocol.

Registers one counter and three summaries on a caller-supplied
CollectorRegistry, namespaced by a subsystem.  Building two instances with
the same subsystem on the same registry reuses the collectors registered by
the first one instead of failing on duplicate timeseries.
"""

from typing import TypeVar

from prometheus_client import CollectorRegistry, Counter, Summary
from prometheus_client.metrics import MetricWrapperBase

from reqwatch.core.exceptions import MetricsRegistrationError
from reqwatch.core.logging import logger

M = TypeVar("M", bound=MetricWrapperBase)

_LABEL_NAMES = ("code", "method", "handler")


def register_or_get(registry: CollectorRegistry, collector: M) -> M:
    """Register ``collector`` or return the compatible one already registered.

    Raises:
        MetricsRegistrationError: if the name is taken by a collector of a
            different type or with different label names.
    """
    name = collector._name
    # Counters are stored without the _total suffix the caller configured.
    series = f"{name}_total" if collector._type == "counter" else name
    try:
        registry.register(collector)
        return collector
    except ValueError as e:
        existing = registry._names_to_collectors.get(name)
        if existing is None:
            reason = f"a different collector owns one of its series ({e})"
        elif type(existing) is not type(collector):
            reason = (
                f"already registered as {type(existing).__name__}, "
                f"not {type(collector).__name__}"
            )
        elif existing._labelnames != collector._labelnames:
            reason = (
                f"already registered with labels {list(existing._labelnames)}, "
                f"not {list(collector._labelnames)}"
            )
        else:
            logger.with_context(metric=series).debug("Reusing registered collector")
            return existing

    logger.with_context(metric=series).error(f"Metric registration conflict: {reason}")
    raise MetricsRegistrationError(series, reason)


class PrometheusHttpMetrics:
    """Prometheus-backed HTTP metrics collection."""

    def __init__(
        self,
        subsystem: str = "",
        registry: CollectorRegistry | None = None,
    ) -> None:
        self.subsystem = subsystem
        self._registry = registry or CollectorRegistry()

        self._requests_total = register_or_get(
            self._registry,
            Counter(
                "requests_total",
                "How many HTTP requests processed, partitioned by status code and HTTP method.",
                _LABEL_NAMES,
                subsystem=subsystem,
                registry=None,
            ),
        )

        self._request_duration = register_or_get(
            self._registry,
            Summary(
                "request_duration_seconds",
                "The HTTP request latencies in seconds.",
                subsystem=subsystem,
                registry=None,
            ),
        )

        self._request_size = register_or_get(
            self._registry,
            Summary(
                "request_size_bytes",
                "The HTTP request sizes in bytes.",
                subsystem=subsystem,
                registry=None,
            ),
        )

        self._response_size = register_or_get(
            self._registry,
            Summary(
                "response_size_bytes",
                "The HTTP response sizes in bytes.",
                subsystem=subsystem,
                registry=None,
            ),
        )

    @property
    def registry(self) -> CollectorRegistry:
        """Registry the collectors live in."""
        return self._registry

    # -- HttpMetrics protocol methods --

    def observe_request(
        self,
        code: str,
        method: str,
        handler: str,
        duration: float,
    ) -> None:
        self._request_duration.observe(duration)
        self._requests_total.labels(code=code, method=method, handler=handler).inc()

    def observe_request_size(self, size: int) -> None:
        self._request_size.observe(size)

    def observe_response_size(self, size: int) -> None:
        self._response_size.observe(size)
