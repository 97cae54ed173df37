"""Fake MetricsRenderer for testing.

Counts generate() calls so tests can assert on scrape behaviour without
depending on prometheus-client.
"""

from reqwatch.core.protocols.metrics_renderer import MetricsRenderer


class FakeMetricsRenderer(MetricsRenderer):
    """In-memory spy implementing the MetricsRenderer protocol."""

    def __init__(self, body: bytes = b"# fake metrics\n") -> None:
        self.body = body
        self.generate_calls: int = 0

    @property
    def content_type(self) -> str:
        return "text/plain"

    def generate(self) -> bytes:
        self.generate_calls += 1
        return self.body
