"""Root command for the ``mcp-bridge`` CLI."""

from __future__ import annotations

import typer

from mcp_bridge.cli import chat, serve

app = typer.Typer(help="Bridge Python tools, MCP servers, and OpenAI chat models.")
app.add_typer(chat.app, name="chat")
app.add_typer(serve.app, name="serve")


def main() -> None:
    """Run the CLI."""
    app()
