"""Tests for argument coercion."""

from __future__ import annotations

from typing import Any

import pytest

from mcp_bridge.models import ParamType
from mcp_bridge.tools.coercion import coerce


@pytest.mark.parametrize(
    ("param_type", "raw", "expected"),
    [
        (ParamType.STRING, "hello", "hello"),
        (ParamType.STRING, 12, "12"),
        (ParamType.STRING, True, "true"),
        (ParamType.UNKNOWN, "anything", "anything"),
        (ParamType.INTEGER, "42", 42),
        (ParamType.INTEGER, " -7 ", -7),
        (ParamType.INTEGER, 5, 5),
        (ParamType.NUMBER, "2.5", 2.5),
        (ParamType.NUMBER, "1e3", 1000.0),
        (ParamType.NUMBER, 3, 3.0),
        (ParamType.BOOLEAN, "true", True),
        (ParamType.BOOLEAN, "false", False),
        (ParamType.BOOLEAN, False, False),
        (ParamType.STRING_ARRAY, '["a", "b"]', ["a", "b"]),
        (ParamType.STRING_ARRAY, ["x"], ["x"]),
        (ParamType.STRING_ARRAY, "[]", []),
        (ParamType.STRING_MAP, '{"k": "v"}', {"k": "v"}),
        (ParamType.STRING_MAP, {"k": 1, "b": True}, {"k": "1", "b": "true"}),
    ],
)
def test_coerce_accepts_valid_values(param_type: ParamType, raw: Any, expected: Any) -> None:
    """Valid values are converted to the declared Python type."""
    outcome = coerce(param_type, raw, name="p")

    assert outcome.ok
    assert outcome.value == expected


@pytest.mark.parametrize(
    ("param_type", "raw"),
    [
        (ParamType.INTEGER, "abc"),
        (ParamType.INTEGER, "1.5"),
        (ParamType.INTEGER, "1_000"),
        (ParamType.INTEGER, "\u0663"),
        (ParamType.INTEGER, True),
        (ParamType.NUMBER, "fast"),
        (ParamType.NUMBER, "nan"),
        (ParamType.NUMBER, "\u0663.5"),
        (ParamType.BOOLEAN, "yes"),
        (ParamType.BOOLEAN, "True"),
        (ParamType.BOOLEAN, "1"),
        (ParamType.BOOLEAN, 1),
        (ParamType.STRING_ARRAY, "a,b"),
        (ParamType.STRING_ARRAY, "[1, 2]"),
        (ParamType.STRING_ARRAY, '{"a": "b"}'),
        (ParamType.STRING_MAP, "[]"),
        (ParamType.STRING_MAP, '{"a": {"nested": "x"}}'),
        (ParamType.STRING_MAP, "not json"),
    ],
)
def test_coerce_reports_errors_without_raising(param_type: ParamType, raw: Any) -> None:
    """Invalid values produce an error naming the parameter."""
    outcome = coerce(param_type, raw, name="count")

    assert not outcome.ok
    assert outcome.value is None
    assert outcome.error is not None
    assert "'count'" in outcome.error
