"""MetricsRenderer protocol for reqwatch scrape surfaces.

The scrape route and the sidecar MetricsServer only need a body and its
content type, so they depend on this protocol while HttpMetrics stays
focused on recording requests.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsRenderer(Protocol):
    """Something that can produce the body of a scrape response."""

    @property
    def content_type(self) -> str:
        """Value for the Content-Type header of a scrape response."""
        ...

    def generate(self) -> bytes:
        """Return the current exposition body."""
        ...
