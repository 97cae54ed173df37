"""HTTP surfaces: the instrumentation middleware and the metrics endpoints."""
