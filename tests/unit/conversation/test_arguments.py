"""Tests for parsing model-issued tool arguments."""

from __future__ import annotations

import pytest

from mcp_bridge.conversation.arguments import parse_tool_arguments
from mcp_bridge.exceptions import ToolArgumentsError


def test_flat_string_map_passes_through() -> None:
    """String values are returned unchanged."""
    assert parse_tool_arguments('{"city": "Danville", "unit": "F"}') == {"city": "Danville", "unit": "F"}


def test_scalars_and_containers_become_text() -> None:
    """Non-string values are carried as their JSON text."""
    parsed = parse_tool_arguments('{"days": 3, "metric": true, "cities": ["Diablo", "Danville"]}')

    assert parsed == {"days": "3", "metric": "true", "cities": '["Diablo", "Danville"]'}


@pytest.mark.parametrize("raw", ["", "   ", None])
def test_empty_arguments(raw: str | None) -> None:
    """Tools without parameters may receive no arguments at all."""
    assert parse_tool_arguments(raw) == {}


@pytest.mark.parametrize("raw", ["{not json", '["a"]', '"text"'])
def test_malformed_arguments_raise(raw: str) -> None:
    """Anything other than a JSON object breaks the contract."""
    with pytest.raises(ToolArgumentsError):
        parse_tool_arguments(raw)
