"""Expose a :class:`ToolRegistry` through an MCP server."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

import anyio
import anyio.to_thread
import mcp.types as mcp_types
import structlog
import uvicorn
from mcp.server.lowlevel import Server
from mcp.server.sse import SseServerTransport
from mcp.server.stdio import stdio_server
from starlette.applications import Starlette
from starlette.responses import Response
from starlette.routing import Mount, Route

from mcp_bridge.exceptions import ToolCallFailedError
from mcp_bridge.tools.registry import ToolRegistry

if TYPE_CHECKING:
    from starlette.requests import Request

    from mcp_bridge.models import ToolDescriptor

logger = structlog.get_logger(__name__)


def to_mcp_tool(descriptor: ToolDescriptor) -> mcp_types.Tool:
    """Convert a descriptor into the MCP tool listing entry."""
    return mcp_types.Tool(
        name=descriptor.name,
        description=descriptor.description,
        inputSchema=descriptor.input_schema(),
    )


class McpToolServer:
    """MCP server whose tools are served from a :class:`ToolRegistry`."""

    def __init__(self, name: str = "mcp-bridge", registry: ToolRegistry | None = None) -> None:
        """Create the low-level MCP server and install the tool handlers."""
        self.registry = registry if registry is not None else ToolRegistry()
        self.server: Server[Any, Any] = Server(name)
        self.server.list_tools()(self.list_tools)
        # Arguments arrive as flat strings; the registry does the coercion.
        self.server.call_tool(validate_input=False)(self.call_tool)

    def add_tool(self, descriptor: ToolDescriptor, func: Callable[..., Any]) -> None:
        """Register ``func`` with the underlying registry."""
        self.registry.add_tool(descriptor, func)

    def names(self) -> list[str]:
        """Return the registered tool names."""
        return self.registry.names()

    async def list_tools(self) -> list[mcp_types.Tool]:
        """Return the MCP listing for every registered tool."""
        return [to_mcp_tool(descriptor) for descriptor in self.registry.descriptors()]

    async def call_tool(self, name: str, arguments: dict[str, Any] | None) -> list[mcp_types.TextContent]:
        """Run a registered tool in a worker thread and return its text content."""
        result = await anyio.to_thread.run_sync(self.registry.call, name, arguments or {})
        if result.is_error:
            raise ToolCallFailedError(result.text)
        return [mcp_types.TextContent(type="text", text=text) for text in result.texts]

    async def serve_stdio(self) -> None:
        """Serve the tools over standard input and output."""
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(read_stream, write_stream, self.server.create_initialization_options())

    def run_stdio(self) -> None:
        """Block serving the tools over stdio."""
        logger.info("server.start", transport="stdio", tools=self.registry.names())
        anyio.run(self.serve_stdio)

    def sse_app(self, sse_path: str = "/sse", message_path: str = "/messages/") -> Starlette:
        """Build a Starlette application serving the SSE transport."""
        transport = SseServerTransport(message_path)

        async def handle_sse(request: Request) -> Response:
            async with transport.connect_sse(request.scope, request.receive, request._send) as (  # noqa: SLF001
                read_stream,
                write_stream,
            ):
                await self.server.run(read_stream, write_stream, self.server.create_initialization_options())
            return Response()

        return Starlette(
            routes=[
                Route(sse_path, endpoint=handle_sse, methods=["GET"]),
                Mount(message_path, app=transport.handle_post_message),
            ],
        )

    def run_sse(self, host: str = "127.0.0.1", port: int = 8080) -> None:
        """Block serving the tools over SSE with uvicorn."""
        logger.info("server.start", transport="sse", host=host, port=port, tools=self.registry.names())
        uvicorn.run(self.sse_app(), host=host, port=port)
