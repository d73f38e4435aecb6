"""Parse model-issued tool arguments into the flat string map the tools accept."""

from __future__ import annotations

import json
from typing import Any

from mcp_bridge.exceptions import ToolArgumentsError


def _flatten(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def parse_tool_arguments(raw: str | None) -> dict[str, str]:
    """Decode ``raw`` as a JSON object and render every value as text.

    Scalars become their JSON text and nested arrays or objects are carried
    as encoded JSON, which the tool side decodes for collection parameters.

    Raises:
        ToolArgumentsError: if ``raw`` is not a JSON object.
    """
    if raw is None or not raw.strip():
        return {}
    try:
        decoded = json.loads(raw)
    except json.JSONDecodeError as exc:
        message = f"tool arguments are not valid JSON: {exc.msg}"
        raise ToolArgumentsError(message) from exc
    if not isinstance(decoded, dict):
        message = f"tool arguments must be a JSON object, got {type(decoded).__name__}"
        raise ToolArgumentsError(message)
    return {str(key): _flatten(value) for key, value in decoded.items()}
