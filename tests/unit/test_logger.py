"""Tests for the structlog-based logger configuration."""

from __future__ import annotations

import json
from collections.abc import Iterator

import pytest
import structlog

from mcp_bridge import logger as logger_module


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """Reset structlog state before and after each test."""
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()


def test_configure_emits_json(capfd: pytest.CaptureFixture[str]) -> None:
    """Configuring with ``json_out=True`` emits JSON log lines."""
    bound_logger = logger_module.configure(level="info", json_out=True)

    bound_logger.info("tool.result", tool="weather", items=3)

    payload = json.loads(capfd.readouterr().err.strip())

    assert payload["event"] == "tool.result"
    assert payload["tool"] == "weather"
    assert payload["items"] == 3
    assert payload["level"] == "info"


def test_configure_filters_below_level(capfd: pytest.CaptureFixture[str]) -> None:
    """Events below the configured level are dropped."""
    bound_logger = logger_module.configure(level="warning", json_out=True)

    bound_logger.info("hidden")
    bound_logger.warning("shown")

    lines = [line for line in capfd.readouterr().err.splitlines() if line.strip()]
    assert [json.loads(line)["event"] for line in lines] == ["shown"]


def test_configure_console_renderer(capfd: pytest.CaptureFixture[str]) -> None:
    """Disabling JSON output falls back to the console renderer."""
    bound_logger = logger_module.configure(level="debug", json_out=False)

    bound_logger.info("another-event", detail="value")

    stderr = capfd.readouterr().err

    assert "another-event" in stderr
    assert "detail" in stderr
