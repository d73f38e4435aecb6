"""Decorator marking callables as tools."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, TypeVar

F = TypeVar("F", bound=Callable[..., Any])

MARKER_ATTRIBUTE = "__llm_tool__"


@dataclass(frozen=True)
class ToolMarker:
    """Metadata attached to a function by :func:`llm_tool`."""

    description: str


def llm_tool(description: str) -> Callable[[F], F]:
    """Mark a function or method as a tool with a human-readable description."""
    if not isinstance(description, str) or not description.strip():
        message = "tool description must be a non-empty string"
        raise ValueError(message)
    marker = ToolMarker(description)

    def decorator(func: F) -> F:
        setattr(func, MARKER_ATTRIBUTE, marker)
        return func

    return decorator


def tool_marker(obj: object) -> ToolMarker | None:
    """Return the tool marker attached to ``obj`` if any."""
    marker = getattr(obj, MARKER_ATTRIBUTE, None)
    return marker if isinstance(marker, ToolMarker) else None
