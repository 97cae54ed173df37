"""Request instrumentation middleware.

Pure ASGI middleware so that response bodies can be counted as they stream
through ``send`` without buffering them.
"""

from __future__ import annotations

from time import perf_counter
from typing import Any

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from reqwatch.core.config import DEFAULT_METRICS_PATH
from reqwatch.core.protocols.http_metrics import HttpMetrics
from reqwatch.core.request_size import compute_approximate_request_size

# Label used when no route matched the request.
UNMATCHED_HANDLER = "unmatched"

_HANDLER_PREFIX = "Handle"


def derive_handler_label(identifier: str) -> str:
    """Turn a handler identifier into a metric label.

    Keeps the last dot-separated segment and strips a leading ``Handle``:
    ``"app.views.HandleUsers"`` becomes ``"Users"``.
    """
    name = identifier.rsplit(".", 1)[-1]
    if name.startswith(_HANDLER_PREFIX):
        name = name[len(_HANDLER_PREFIX) :]
    return name


def resolve_handler_identifier(scope: Scope) -> str | None:
    """Identify the handler that served a request, after routing ran.

    The route name wins since FastAPI lets callers set it with ``name=``;
    plain Starlette routes only leave the endpoint behind in the scope.
    """
    route = scope.get("route")
    route_name = getattr(route, "name", None)
    if route_name:
        return route_name

    endpoint: Any = scope.get("endpoint")
    if endpoint is None:
        return None
    qualname = getattr(endpoint, "__qualname__", None) or type(endpoint).__qualname__
    module = getattr(endpoint, "__module__", None)
    return f"{module}.{qualname}" if module else qualname


class PrometheusMiddleware:
    """Records count, latency and sizes of every request except the scrape path."""

    def __init__(
        self,
        app: ASGIApp,
        metrics: HttpMetrics,
        metrics_path: str = DEFAULT_METRICS_PATH,
    ) -> None:
        self.app = app
        self.metrics = metrics
        self.metrics_path = metrics_path

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope.get("path") == self.metrics_path:
            await self.app(scope, receive, send)
            return

        start = perf_counter()
        request_size = compute_approximate_request_size(scope)
        status_code = 200
        response_size = 0

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code, response_size

            if message["type"] == "http.response.start":
                status_code = int(message["status"])
            elif message["type"] == "http.response.body":
                response_size += len(message.get("body", b""))

            await send(message)

        # Errors raised downstream propagate and the request is not recorded.
        await self.app(scope, receive, send_wrapper)

        elapsed = perf_counter() - start
        identifier = resolve_handler_identifier(scope)
        handler = UNMATCHED_HANDLER if identifier is None else derive_handler_label(identifier)

        self.metrics.observe_request(
            code=str(status_code),
            method=scope["method"].lower(),
            handler=handler,
            duration=elapsed,
        )
        self.metrics.observe_request_size(request_size)
        self.metrics.observe_response_size(response_size)
