"""CLI entry points for chatting with a tool-using model."""

from __future__ import annotations

import json

import typer

from mcp_bridge.container import build_container
from mcp_bridge.exceptions import BridgeError
from mcp_bridge.llm.tools_adapter import remote_tool_to_openai_spec

app = typer.Typer(help="Ask questions of a model that can call remote MCP tools.")


@app.command()
def ask(
    url: str = typer.Argument(..., help="URL of the MCP server, e.g. http://127.0.0.1:8080/sse."),
    query: str = typer.Argument(..., help="Question to answer."),
    system_prompt: str | None = typer.Option(
        None,
        "--system-prompt",
        "-s",
        help="Override the configured system prompt.",
    ),
) -> None:
    """Answer a query, calling tools on the server as the model requests."""
    container = build_container()
    try:
        driver = container.driver()
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc

    with driver:
        try:
            driver.connect_to_server(url)
            answer = driver.process_query(query, system_prompt)
        except BridgeError as exc:
            typer.echo(str(exc), err=True)
            raise typer.Exit(code=1) from exc
    typer.echo(answer)


@app.command("tools")
def list_tools(
    url: str = typer.Argument(..., help="URL of the MCP server."),
) -> None:
    """Print the OpenAI function schema for the server's tools."""
    container = build_container()
    with container.tool_client() as client:
        try:
            client.connect(url)
        except BridgeError as exc:
            typer.echo(str(exc), err=True)
            raise typer.Exit(code=1) from exc
        spec = [remote_tool_to_openai_spec(tool) for tool in client.list_tools()]
    typer.echo(json.dumps(spec, indent=2))
