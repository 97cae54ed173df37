"""Unit tests for Settings."""

import os
import subprocess
import sys

import pytest
from pydantic import ValidationError

from reqwatch.core.config import DEFAULT_METRICS_PATH, Settings


def test_defaults(monkeypatch):
    for name in ("METRICS_PATH", "METRICS_SUBSYSTEM", "METRICS_SIDECAR_ENABLED"):
        monkeypatch.delenv(f"REQWATCH_{name}", raising=False)

    settings = Settings(_env_file=None)

    assert settings.METRICS_PATH == DEFAULT_METRICS_PATH
    assert settings.METRICS_SUBSYSTEM == ""
    assert settings.METRICS_SIDECAR_ENABLED is False


def test_reads_prefixed_environment(monkeypatch):
    monkeypatch.setenv("REQWATCH_METRICS_PATH", "/internal/metrics")
    monkeypatch.setenv("REQWATCH_METRICS_SUBSYSTEM", "api")
    monkeypatch.setenv("REQWATCH_METRICS_PORT", "9200")
    monkeypatch.setenv("REQWATCH_LOG_LEVEL", "debug")

    settings = Settings(_env_file=None)

    assert settings.METRICS_PATH == "/internal/metrics"
    assert settings.METRICS_SUBSYSTEM == "api"
    assert settings.METRICS_PORT == 9200
    assert settings.LOG_LEVEL == "DEBUG"


def test_relative_metrics_path_is_rejected():
    with pytest.raises(ValidationError):
        Settings(METRICS_PATH="metrics", _env_file=None)


def test_import_does_not_read_environment():
    """A stray invalid variable must not break importing the package."""
    env = dict(os.environ, REQWATCH_METRICS_PATH="metrics")

    result = subprocess.run(
        [sys.executable, "-c", "import reqwatch, reqwatch.api.main"],
        env=env,
        capture_output=True,
        text=True,
    )

    assert result.returncode == 0, result.stderr
