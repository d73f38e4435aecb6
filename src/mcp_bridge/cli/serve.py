"""CLI entry points for serving Python tools over MCP."""

from __future__ import annotations

import importlib
import inspect

import typer

from mcp_bridge.container import build_container
from mcp_bridge.tools.registry import register_tools

app = typer.Typer(help="Serve llm_tool methods of a Python object over MCP.")

DEFAULT_TARGET = "mcp_bridge.demo:CaliforniaWeather"


def load_target(spec: str) -> object:
    """Import ``module:attribute``; classes are instantiated without arguments."""
    module_name, _, attribute = spec.partition(":")
    if not module_name or not attribute:
        message = f"target must look like 'module:attribute', got {spec!r}"
        raise ValueError(message)
    target = getattr(importlib.import_module(module_name), attribute)
    if inspect.isclass(target):
        return target()
    return target


@app.command()
def run(
    target: str = typer.Option(DEFAULT_TARGET, "--target", "-t", help="Object exposing tools, as module:attribute."),
    transport: str = typer.Option("sse", "--transport", help="Transport to serve on: sse or stdio."),
    host: str | None = typer.Option(None, "--host", help="Bind address for SSE."),
    port: int | None = typer.Option(None, "--port", help="Port for SSE."),
) -> None:
    """Register the target's tools and serve them until interrupted."""
    if transport not in {"sse", "stdio"}:
        typer.echo(f"Unsupported transport: {transport}", err=True)
        raise typer.Exit(code=1)

    container = build_container()
    try:
        tools_object = load_target(target)
    except (ImportError, AttributeError, ValueError) as exc:
        typer.echo(f"Cannot load target {target}: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    server = container.tool_server()
    descriptors = register_tools(server, tools_object)
    if not descriptors:
        typer.echo(f"Warning: {target} exposes no tools.", err=True)

    if transport == "stdio":
        server.run_stdio()
        return
    server.run_sse(
        host=host or container.settings.server_host,
        port=port or container.settings.server_port,
    )
