"""Tests for the ``mcp-bridge serve`` CLI entry point."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import SimpleNamespace
from typing import Any

import pytest
from typer.testing import CliRunner

from mcp_bridge.cli import serve as serve_cli
from mcp_bridge.demo import CaliforniaWeather
from mcp_bridge.tools.registry import ToolRegistry


class _StubServer:
    """Tool server double that records how it was started."""

    def __init__(self) -> None:
        self.registry = ToolRegistry()
        self.started: list[tuple[str, Any]] = []

    def add_tool(self, descriptor: Any, func: Any) -> None:
        self.registry.add_tool(descriptor, func)

    def names(self) -> list[str]:
        return self.registry.names()

    def run_sse(self, host: str, port: int) -> None:
        self.started.append(("sse", (host, port)))

    def run_stdio(self) -> None:
        self.started.append(("stdio", None))


@dataclass
class _StubContainer:
    server: _StubServer = field(default_factory=_StubServer)
    settings: Any = field(default_factory=lambda: SimpleNamespace(server_host="127.0.0.1", server_port=8080))

    def tool_server(self) -> _StubServer:
        return self.server


@pytest.fixture
def runner() -> CliRunner:
    """Return a CLI runner for invoking Typer commands."""
    return CliRunner()


def test_load_target_instantiates_classes() -> None:
    """Class targets are instantiated without arguments."""
    assert isinstance(serve_cli.load_target("mcp_bridge.demo:CaliforniaWeather"), CaliforniaWeather)


def test_load_target_rejects_malformed_spec() -> None:
    """Targets must name both a module and an attribute."""
    with pytest.raises(ValueError, match="module:attribute"):
        serve_cli.load_target("mcp_bridge.demo")


def test_run_registers_default_target_over_sse(monkeypatch: pytest.MonkeyPatch, runner: CliRunner) -> None:
    """The default target's tools are served on the configured address."""
    container = _StubContainer()
    monkeypatch.setattr(serve_cli, "build_container", lambda: container)

    result = runner.invoke(serve_cli.app, ["--port", "9000"])

    assert result.exit_code == 0
    assert container.server.registry.names() == ["hottest_city", "list_cities", "temperature"]
    assert container.server.started == [("sse", ("127.0.0.1", 9000))]


def test_run_over_stdio(monkeypatch: pytest.MonkeyPatch, runner: CliRunner) -> None:
    """The stdio transport can be selected."""
    container = _StubContainer()
    monkeypatch.setattr(serve_cli, "build_container", lambda: container)

    result = runner.invoke(serve_cli.app, ["--transport", "stdio"])

    assert result.exit_code == 0
    assert container.server.started == [("stdio", None)]


def test_run_rejects_unknown_transport(runner: CliRunner) -> None:
    """Only sse and stdio are served."""
    result = runner.invoke(serve_cli.app, ["--transport", "carrier-pigeon"])

    assert result.exit_code == 1
    assert "Unsupported transport" in result.output


def test_run_reports_unloadable_target(monkeypatch: pytest.MonkeyPatch, runner: CliRunner) -> None:
    """Import failures exit non-zero."""
    monkeypatch.setattr(serve_cli, "build_container", lambda: _StubContainer())

    result = runner.invoke(serve_cli.app, ["--target", "no_such_module_xyz:Tools"])

    assert result.exit_code == 1
    assert "Cannot load target" in result.output
