"""Shared fixtures."""

import logging

import pytest
from prometheus_client import CollectorRegistry

from reqwatch.adapters.http_metrics import FakeHttpMetrics


@pytest.fixture
def registry():
    """Fresh registry so no test sees another test's collectors."""
    return CollectorRegistry()


@pytest.fixture
def fake_metrics():
    return FakeHttpMetrics()


@pytest.fixture(autouse=True)
def restore_reqwatch_logger():
    """Undo configure_logging() calls made by app factory tests."""
    base = logging.getLogger("reqwatch")
    saved = (base.handlers[:], base.level, base.propagate)
    yield
    base.handlers, base.level, base.propagate = list(saved[0]), saved[1], saved[2]
