"""Fake HttpMetrics for testing.

Records all calls in memory so tests can assert on metrics behaviour
without reaching into prometheus-client internals.
"""

from dataclasses import dataclass


@dataclass
class RequestRecord:
    """Single observed request."""

    code: str
    method: str
    handler: str
    duration: float


class FakeHttpMetrics:
    """In-memory spy implementing the HttpMetrics protocol.

    Usage:
        fake = FakeHttpMetrics()
        # … inject into PrometheusMiddleware …
        assert len(fake.requests) == 1
        assert fake.request_sizes == [33]
    """

    def __init__(self) -> None:
        self.requests: list[RequestRecord] = []
        self.request_sizes: list[int] = []
        self.response_sizes: list[int] = []

    def observe_request(
        self,
        code: str,
        method: str,
        handler: str,
        duration: float,
    ) -> None:
        self.requests.append(RequestRecord(code, method, handler, duration))

    def observe_request_size(self, size: int) -> None:
        self.request_sizes.append(size)

    def observe_response_size(self, size: int) -> None:
        self.response_sizes.append(size)

    # -- test helpers --

    def clear(self) -> None:
        """Reset all recorded state."""
        self.requests.clear()
        self.request_sizes.clear()
        self.response_sizes.clear()
