"""Coerce loosely typed JSON arguments into declared parameter types."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Callable

from mcp_bridge.models import ParamType

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
_NUMBER_PATTERN = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


@dataclass(frozen=True)
class Coercion:
    """Outcome of coercing one argument: either a value or an error message."""

    value: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Return ``True`` when the coercion produced a value."""
        return self.error is None

    @classmethod
    def success(cls, value: Any) -> Coercion:
        """Wrap a successfully coerced value."""
        return cls(value=value)

    @classmethod
    def failure(cls, message: str) -> Coercion:
        """Wrap a coercion error message."""
        return cls(error=message)


def json_text(raw: Any) -> str:
    """Return the textual content of a JSON value."""
    if isinstance(raw, str):
        return raw
    return json.dumps(raw, ensure_ascii=False)


def _mismatch(name: str, expected: str, raw: Any) -> Coercion:
    return Coercion.failure(f"parameter '{name}' expects {expected}, got {json_text(raw)!r}")


def _load_json(raw: Any) -> tuple[Any, bool]:
    """Decode ``raw`` when it is text; return ``(value, decoded_ok)``."""
    if not isinstance(raw, str):
        return raw, True
    try:
        return json.loads(raw), True
    except json.JSONDecodeError:
        return None, False


def _coerce_text(name: str, raw: Any) -> Coercion:
    del name
    return Coercion.success(json_text(raw))


def _coerce_integer(name: str, raw: Any) -> Coercion:
    if isinstance(raw, bool):
        return _mismatch(name, "an integer", raw)
    if isinstance(raw, int):
        return Coercion.success(raw)
    text = json_text(raw).strip()
    if not _INTEGER_PATTERN.fullmatch(text):
        return _mismatch(name, "an integer", raw)
    return Coercion.success(int(text))


def _coerce_number(name: str, raw: Any) -> Coercion:
    if isinstance(raw, bool):
        return _mismatch(name, "a number", raw)
    if isinstance(raw, (int, float)):
        return Coercion.success(float(raw))
    text = json_text(raw).strip()
    if not _NUMBER_PATTERN.fullmatch(text):
        return _mismatch(name, "a number", raw)
    return Coercion.success(float(text))


def _coerce_boolean(name: str, raw: Any) -> Coercion:
    if isinstance(raw, bool):
        return Coercion.success(raw)
    text = json_text(raw)
    if text == "true":
        return Coercion.success(True)
    if text == "false":
        return Coercion.success(False)
    return _mismatch(name, "'true' or 'false'", raw)


def _coerce_string_array(name: str, raw: Any) -> Coercion:
    value, decoded = _load_json(raw)
    if not decoded or not isinstance(value, list):
        return _mismatch(name, "a JSON array of strings", raw)
    if not all(isinstance(item, str) for item in value):
        return _mismatch(name, "a JSON array of strings", raw)
    return Coercion.success(list(value))


def _coerce_string_map(name: str, raw: Any) -> Coercion:
    value, decoded = _load_json(raw)
    if not decoded or not isinstance(value, dict):
        return _mismatch(name, "a JSON object of strings", raw)
    flattened: dict[str, str] = {}
    for key, item in value.items():
        if isinstance(item, (dict, list)):
            return _mismatch(name, "a flat JSON object of strings", raw)
        flattened[str(key)] = json_text(item)
    return Coercion.success(flattened)


_COERCERS: dict[ParamType, Callable[[str, Any], Coercion]] = {
    ParamType.STRING: _coerce_text,
    ParamType.UNKNOWN: _coerce_text,
    ParamType.INTEGER: _coerce_integer,
    ParamType.NUMBER: _coerce_number,
    ParamType.BOOLEAN: _coerce_boolean,
    ParamType.STRING_ARRAY: _coerce_string_array,
    ParamType.STRING_MAP: _coerce_string_map,
}


def coerce(param_type: ParamType, raw: Any, *, name: str = "value") -> Coercion:
    """Coerce ``raw`` to ``param_type``; never raises."""
    return _COERCERS[param_type](name, raw)
