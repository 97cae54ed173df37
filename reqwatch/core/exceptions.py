"""Exceptions raised by reqwatch."""


class ReqwatchException(Exception):
    """Base class for all reqwatch errors."""

    def __init__(self, message: str = "An error occurred"):
        """Create a new ReqwatchException.

        Args:
            message: Human readable description of the failure.
        """
        self.message = message
        super().__init__(self.message)


class MetricsRegistrationError(ReqwatchException):
    """Raised when a collector cannot be registered or reused.

    Covers a name that is already taken by a collector of a different type,
    one with different label names, or a partial name collision inside the
    registry. Instrumentation refuses to start rather than record into the
    wrong metric.
    """

    def __init__(self, metric_name: str, reason: str):
        """Create a new MetricsRegistrationError.

        Args:
            metric_name: Fully qualified metric name that failed to register.
            reason: Why the existing registration is incompatible.
        """
        self.metric_name = metric_name
        self.reason = reason
        super().__init__(f"Cannot register metric '{metric_name}': {reason}")
