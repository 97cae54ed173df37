"""Unit tests for the scrape endpoint and the sidecar metrics server."""

import aiohttp
import pytest
from aiohttp.test_utils import make_mocked_request
from fastapi.testclient import TestClient
from starlette.applications import Starlette
from starlette.routing import Route

from reqwatch.adapters.metrics_renderer import FakeMetricsRenderer
from reqwatch.api.metrics import MetricsServer, metrics_endpoint


class TestMetricsEndpoint:
    def test_serves_renderer_output(self):
        fake = FakeMetricsRenderer()
        app = Starlette(routes=[Route("/metrics", metrics_endpoint(fake), methods=["GET"])])

        resp = TestClient(app).get("/metrics")

        assert resp.status_code == 200
        assert resp.content == b"# fake metrics\n"
        assert resp.headers["content-type"].startswith("text/plain")
        assert fake.generate_calls == 1


class TestMetricsServer:
    """Tests for the sidecar MetricsServer."""

    @pytest.mark.asyncio
    async def test_handle_metrics_returns_fake_body_and_content_type(self):
        """Handler should delegate to the renderer's generate() and content_type."""
        fake = FakeMetricsRenderer()
        server = MetricsServer(fake, port=0)

        request = make_mocked_request("GET", "/metrics")
        response = await server._handle_metrics(request)

        assert response.body == b"# fake metrics\n"
        assert response.content_type == "text/plain"
        assert fake.generate_calls == 1

    @pytest.mark.asyncio
    async def test_start_and_stop_serves_metrics(self):
        """A started server should respond with metrics on /metrics."""
        fake = FakeMetricsRenderer()
        server = MetricsServer(fake, port=0, host="127.0.0.1")
        await server.start()

        try:
            port = server.bound_port
            async with aiohttp.ClientSession() as session:
                async with session.get(f"http://127.0.0.1:{port}/metrics") as resp:
                    assert resp.status == 200
                    body = await resp.read()
                    assert body == b"# fake metrics\n"
        finally:
            await server.stop()

        assert server.bound_port is None

    @pytest.mark.asyncio
    async def test_custom_path(self):
        fake = FakeMetricsRenderer()
        server = MetricsServer(fake, port=0, host="127.0.0.1", path="/internal/metrics")
        await server.start()

        try:
            base = f"http://127.0.0.1:{server.bound_port}"
            async with aiohttp.ClientSession() as session:
                async with session.get(f"{base}/internal/metrics") as resp:
                    assert resp.status == 200
                async with session.get(f"{base}/metrics") as resp:
                    assert resp.status == 404
        finally:
            await server.stop()

    @pytest.mark.asyncio
    async def test_stop_is_safe_when_not_started(self):
        """Calling stop() before start() must not raise."""
        server = MetricsServer(FakeMetricsRenderer(), port=0)
        await server.stop()
