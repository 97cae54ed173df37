"""HttpMetrics protocol for HTTP request/response instrumentation.

Abstracts metric collection so the middleware depends on a protocol rather
than a concrete library.  Production uses Prometheus; tests inject a fake
that records calls in memory.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class HttpMetrics(Protocol):
    """Protocol for HTTP request/response metrics collection."""

    def observe_request(
        self,
        code: str,
        method: str,
        handler: str,
        duration: float,
    ) -> None:
        """Record a completed request (latency + count).

        Args:
            code: Response status code as a string.
            method: Lowercased HTTP method (get, post, …).
            handler: Label of the handler that served the request.
            duration: Request duration in seconds.
        """
        ...

    def observe_request_size(self, size: int) -> None:
        """Record the approximate request size in bytes."""
        ...

    def observe_response_size(self, size: int) -> None:
        """Record the response body size in bytes."""
        ...
