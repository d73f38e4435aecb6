"""Adapters for exposing remote tools to LLM function calls."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from mcp_bridge.models import RemoteTool


def remote_tool_to_openai_spec(tool: RemoteTool) -> dict[str, Any]:
    """Convert a remote tool listing into an OpenAI function tool schema."""
    schema = tool.input_schema
    return {
        "type": "function",
        "function": {
            "name": tool.name,
            "description": tool.description,
            "parameters": {
                "type": schema.get("type", "object"),
                "properties": schema.get("properties", {}),
                "required": schema.get("required", []),
            },
        },
    }
