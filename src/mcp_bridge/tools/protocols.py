"""Protocols describing the tool server and tool source seams."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Protocol

if TYPE_CHECKING:
    from collections.abc import Mapping

    from mcp_bridge.models import RemoteTool, ToolDescriptor, ToolResult


class ToolServer(Protocol):
    """Component that serves registered tools to remote callers."""

    def add_tool(self, descriptor: ToolDescriptor, func: Callable[..., Any]) -> None:
        """Register ``func`` under ``descriptor.name``."""
        ...

    def names(self) -> list[str]:
        """Return the names of the tools already registered."""
        ...


class ToolSource(Protocol):
    """Client side of a remote tool server."""

    def connect(self, url: str) -> None:
        """Perform the handshake with the server at ``url``."""
        ...

    def list_tools(self) -> list[RemoteTool]:
        """Return every tool the server advertises."""
        ...

    def call_tool(self, name: str, arguments: Mapping[str, str]) -> ToolResult:
        """Invoke a remote tool and return its result envelope."""
        ...

    def close(self) -> None:
        """Release the connection."""
        ...
