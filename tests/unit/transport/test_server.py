"""Tests for serving registered tools through the MCP SDK."""

from __future__ import annotations

import anyio
import mcp.types as mcp_types
import pytest
from mcp.shared.memory import create_connected_server_and_client_session

from mcp_bridge.demo import CaliforniaWeather
from mcp_bridge.exceptions import BridgeError, DuplicateToolError, ToolCallFailedError
from mcp_bridge.tools.registry import register_tools
from mcp_bridge.transport.server import McpToolServer


@pytest.fixture
def server() -> McpToolServer:
    """Return a server exposing the demo weather tools."""
    server = McpToolServer("weather")
    register_tools(server, CaliforniaWeather())
    return server


def test_list_tools_exposes_descriptors(server: McpToolServer) -> None:
    """Each registered tool is listed with its input schema."""
    tools = {tool.name: tool for tool in anyio.run(server.list_tools)}

    assert sorted(tools) == ["hottest_city", "list_cities", "temperature"]
    assert tools["temperature"].inputSchema == {
        "type": "object",
        "properties": {"city": {"type": "string"}, "unit": {"type": "string"}},
        "required": ["city"],
    }
    assert tools["hottest_city"].inputSchema["properties"] == {"cities": {"type": "array"}}


def test_call_tool_returns_text_content(server: McpToolServer) -> None:
    """Successful calls return one text block per result item."""
    content = anyio.run(server.call_tool, "list_cities", {})

    assert all(isinstance(item, mcp_types.TextContent) for item in content)
    assert [item.text for item in content][:2] == ["Danville", "Diablo"]


def test_call_tool_failure_raises_for_the_sdk(server: McpToolServer) -> None:
    """Error results are raised so the SDK flags them as errors."""
    with pytest.raises(ToolCallFailedError, match="no weather data for Atlantis") as excinfo:
        anyio.run(server.call_tool, "temperature", {"city": "Atlantis"})

    assert isinstance(excinfo.value, BridgeError)


def test_duplicate_registration_is_rejected(server: McpToolServer) -> None:
    """The server refuses a second tool with an existing name."""
    before = server.names()

    with pytest.raises(DuplicateToolError):
        register_tools(server, CaliforniaWeather())

    assert server.names() == before


def test_round_trip_through_client_session(server: McpToolServer) -> None:
    """A client session sees coerced results and error-flagged failures."""

    async def exercise() -> tuple[mcp_types.ListToolsResult, mcp_types.CallToolResult, mcp_types.CallToolResult]:
        async with create_connected_server_and_client_session(server.server) as client:
            listing = await client.list_tools()
            converted = await client.call_tool("temperature", {"city": "Fresno", "unit": "C"})
            failed = await client.call_tool("temperature", {})
            return listing, converted, failed

    listing, converted, failed = anyio.run(exercise)

    assert {tool.name for tool in listing.tools} == {"hottest_city", "list_cities", "temperature"}
    assert not converted.isError
    assert [item.text for item in converted.content if isinstance(item, mcp_types.TextContent)] == ["36.1 C"]
    assert failed.isError
    assert "city" in failed.content[0].text


def test_sse_app_routes(server: McpToolServer) -> None:
    """The SSE application exposes the stream and message endpoints."""
    app = server.sse_app()

    paths = [route.path for route in app.routes]
    assert "/sse" in paths
    assert any(path.startswith("/messages") for path in paths)
