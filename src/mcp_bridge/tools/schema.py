"""Derive tool descriptors from Python callables."""

from __future__ import annotations

import collections.abc
import inspect
import types
import typing
from typing import Any, Callable, Union

from mcp_bridge.models import ParameterSpec, ParamType, ToolDescriptor

_SCALAR_TYPES: dict[Any, ParamType] = {
    str: ParamType.STRING,
    bool: ParamType.BOOLEAN,
    int: ParamType.INTEGER,
    float: ParamType.NUMBER,
}

_ARRAY_ORIGINS: frozenset[Any] = frozenset(
    {
        list,
        tuple,
        set,
        frozenset,
        collections.abc.Sequence,
        collections.abc.MutableSequence,
        collections.abc.Set,
        collections.abc.MutableSet,
    },
)

_MAP_ORIGINS: frozenset[Any] = frozenset(
    {dict, collections.abc.Mapping, collections.abc.MutableMapping},
)

_SKIPPED_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def param_type_for(annotation: Any) -> ParamType:
    """Map a Python annotation onto the closed set of parameter types.

    ``X | None`` is treated as ``X``. Anything unrecognised, including a
    missing annotation, maps to ``ParamType.UNKNOWN``.
    """
    origin = typing.get_origin(annotation)
    if origin in (Union, types.UnionType):
        members = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(members) == 1:
            return param_type_for(members[0])
        return ParamType.UNKNOWN

    base = origin if origin is not None else annotation
    try:
        scalar = _SCALAR_TYPES.get(base)
    except TypeError:  # unhashable annotation objects
        return ParamType.UNKNOWN
    if scalar is not None:
        return scalar
    if base in _ARRAY_ORIGINS:
        return ParamType.STRING_ARRAY
    if base in _MAP_ORIGINS:
        return ParamType.STRING_MAP
    return ParamType.UNKNOWN


def resolved_annotations(func: Callable[..., Any]) -> dict[str, Any]:
    """Return the evaluated annotations of ``func``, falling back to raw ones."""
    try:
        return typing.get_type_hints(func)
    except (NameError, TypeError):
        return dict(getattr(func, "__annotations__", {}))


def exposed_parameters(func: Callable[..., Any]) -> list[inspect.Parameter]:
    """Return the parameters of ``func`` that can be supplied by name."""
    signature = inspect.signature(func)
    return [param for param in signature.parameters.values() if param.kind not in _SKIPPED_KINDS]


def describe_callable(func: Callable[..., Any], *, name: str, description: str) -> ToolDescriptor:
    """Build a :class:`ToolDescriptor` from the signature of ``func``."""
    hints = resolved_annotations(func)
    specs: list[ParameterSpec] = []
    for param in exposed_parameters(func):
        has_default = param.default is not inspect.Parameter.empty
        specs.append(
            ParameterSpec(
                name=param.name,
                type=param_type_for(hints.get(param.name, param.annotation)),
                required=not has_default,
                default=param.default if has_default else None,
            ),
        )
    return ToolDescriptor(name=name, description=description, parameters=tuple(specs))
