"""Data models for tool descriptors, result envelopes, and remote tools."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class ParamType(str, Enum):
    """Closed set of parameter types a tool may declare."""

    STRING = "string"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING_ARRAY = "array"
    STRING_MAP = "object"
    UNKNOWN = "unknown"

    @property
    def json_type(self) -> str:
        """Return the JSON schema type name; unknown types degrade to ``string``."""
        if self is ParamType.UNKNOWN:
            return ParamType.STRING.value
        return self.value


class ParameterSpec(BaseModel):
    """A single declared tool parameter."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: ParamType = ParamType.STRING
    required: bool = True
    default: Any = None


class ToolDescriptor(BaseModel):
    """Name, description, and ordered parameters of a registered tool."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    parameters: tuple[ParameterSpec, ...] = ()

    def input_schema(self) -> dict[str, Any]:
        """Build the JSON schema describing the tool input."""
        return {
            "type": "object",
            "properties": {param.name: {"type": param.type.json_type} for param in self.parameters},
            "required": [param.name for param in self.parameters if param.required],
        }


class TextContent(BaseModel):
    """A single text item of a tool result."""

    type: Literal["text"] = "text"
    text: str


def _empty_content() -> list[TextContent]:
    """Return an empty list for result content."""
    return []


class ToolResult(BaseModel):
    """Result envelope returned for every tool invocation."""

    model_config = ConfigDict(populate_by_name=True)

    content: list[TextContent] = Field(default_factory=_empty_content)
    is_error: bool = Field(default=False, alias="isError")

    @classmethod
    def from_value(cls, value: object) -> ToolResult:
        """Render a tool return value as text content.

        Iterables produce one item per element in iteration order, ``None``
        produces no content, and any other value is rendered with ``str``.
        """
        if value is None:
            return cls()
        if isinstance(value, (str, bytes, bytearray, Mapping)):
            return cls(content=[TextContent(text=_as_text(value))])
        if isinstance(value, Iterable):
            return cls(content=[TextContent(text=_as_text(item)) for item in value])
        return cls(content=[TextContent(text=_as_text(value))])

    @classmethod
    def error(cls, message: str) -> ToolResult:
        """Build an error-flagged result carrying ``message``."""
        return cls(content=[TextContent(text=message)], is_error=True)

    @property
    def texts(self) -> list[str]:
        """Return the text of each content item."""
        return [item.text for item in self.content]

    @property
    def text(self) -> str:
        """Return all content joined by newlines."""
        return "\n".join(self.texts)


def _as_text(value: object) -> str:
    """Render a single value as text."""
    if isinstance(value, (bytes, bytearray)):
        return value.decode("utf-8", errors="replace")
    return str(value)


class RemoteTool(BaseModel):
    """A tool as advertised by a remote tool server."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str = ""
    input_schema: dict[str, Any] = Field(default_factory=dict, alias="inputSchema")
