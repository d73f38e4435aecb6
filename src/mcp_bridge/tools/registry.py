"""Registry that turns Python callables into remotely invocable tools."""

from __future__ import annotations

import collections.abc
import inspect
import typing
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypeVar

import structlog

from mcp_bridge.exceptions import DuplicateToolError
from mcp_bridge.models import ToolDescriptor, ToolResult
from mcp_bridge.tools.annotation import tool_marker
from mcp_bridge.tools.coercion import coerce
from mcp_bridge.tools.schema import describe_callable, exposed_parameters, resolved_annotations

if TYPE_CHECKING:
    from mcp_bridge.tools.protocols import ToolServer

F = TypeVar("F", bound=Callable[..., Any])

logger = structlog.get_logger(__name__)

_COLLECTION_FACTORIES: dict[Any, Callable[[list[str]], Any]] = {
    set: set,
    frozenset: frozenset,
    tuple: tuple,
    collections.abc.Set: frozenset,
    collections.abc.MutableSet: set,
}


@dataclass
class _BoundArguments:
    args: list[Any] = field(default_factory=list)
    kwargs: dict[str, Any] = field(default_factory=dict)
    error: str | None = None


@dataclass(frozen=True)
class _Entry:
    """A registered tool: descriptor, function, and calling convention."""

    descriptor: ToolDescriptor
    func: Callable[..., Any]
    keyword_only: frozenset[str]
    array_factories: Mapping[str, Callable[[list[str]], Any]]

    def bind(self, arguments: Mapping[str, Any]) -> _BoundArguments:
        """Coerce ``arguments`` into a positional/keyword call for ``func``."""
        bound = _BoundArguments()
        for spec in self.descriptor.parameters:
            if spec.name in arguments:
                outcome = coerce(spec.type, arguments[spec.name], name=spec.name)
                if not outcome.ok:
                    return _BoundArguments(error=outcome.error)
                value = outcome.value
                factory = self.array_factories.get(spec.name)
                if factory is not None:
                    value = factory(value)
            elif spec.required:
                return _BoundArguments(error=f"missing required parameter '{spec.name}'")
            else:
                value = spec.default

            if spec.name in self.keyword_only:
                bound.kwargs[spec.name] = value
            else:
                bound.args.append(value)
        return bound


def _calling_convention(func: Callable[..., Any]) -> tuple[frozenset[str], dict[str, Callable[[list[str]], Any]]]:
    """Inspect ``func`` for keyword-only parameters and non-list array types."""
    try:
        parameters = exposed_parameters(func)
    except (TypeError, ValueError):
        return frozenset(), {}
    hints = resolved_annotations(func)
    keyword_only = frozenset(p.name for p in parameters if p.kind is inspect.Parameter.KEYWORD_ONLY)
    factories: dict[str, Callable[[list[str]], Any]] = {}
    for param in parameters:
        annotation = hints.get(param.name)
        origin = typing.get_origin(annotation) or annotation
        try:
            factory = _COLLECTION_FACTORIES.get(origin)
        except TypeError:
            factory = None
        if factory is not None:
            factories[param.name] = factory
    return keyword_only, factories


class ToolRegistry:
    """Registered tools keyed by name.

    Entries are immutable once added, so :meth:`call` may be invoked from
    several threads at once.
    """

    def __init__(self) -> None:
        """Initialise an empty registry."""
        self._entries: dict[str, _Entry] = {}

    def __contains__(self, name: object) -> bool:
        """Return ``True`` when a tool named ``name`` is registered."""
        return name in self._entries

    def __len__(self) -> int:
        """Return the number of registered tools."""
        return len(self._entries)

    def __iter__(self) -> Iterator[ToolDescriptor]:
        """Iterate over the registered descriptors in registration order."""
        return iter(self.descriptors())

    def add_tool(self, descriptor: ToolDescriptor, func: Callable[..., Any]) -> None:
        """Register ``func`` under ``descriptor.name``.

        Raises:
            DuplicateToolError: if the name is already taken.
        """
        if descriptor.name in self._entries:
            raise DuplicateToolError(descriptor.name)
        keyword_only, array_factories = _calling_convention(func)
        self._entries[descriptor.name] = _Entry(
            descriptor=descriptor,
            func=func,
            keyword_only=keyword_only,
            array_factories=array_factories,
        )
        logger.debug(
            "tool.registered",
            tool=descriptor.name,
            parameters=[param.name for param in descriptor.parameters],
        )

    def tool(self, description: str, *, name: str | None = None) -> Callable[[F], F]:
        """Register the decorated function as a tool."""

        def decorator(func: F) -> F:
            tool_name = name or func.__name__
            self.add_tool(describe_callable(func, name=tool_name, description=description), func)
            return func

        return decorator

    def get(self, name: str) -> ToolDescriptor:
        """Return the descriptor registered under ``name``."""
        return self._entries[name].descriptor

    def names(self) -> list[str]:
        """Return registered tool names in registration order."""
        return list(self._entries)

    def descriptors(self) -> list[ToolDescriptor]:
        """Return registered descriptors in registration order."""
        return [entry.descriptor for entry in self._entries.values()]

    def call(self, name: str, arguments: Mapping[str, Any] | None = None) -> ToolResult:
        """Invoke a tool and wrap its outcome in a :class:`ToolResult`.

        Unknown tools, coercion failures, and exceptions raised by the tool
        are all returned as error-flagged results.
        """
        entry = self._entries.get(name)
        if entry is None:
            return ToolResult.error(f"unknown tool '{name}'")

        bound = entry.bind(arguments or {})
        if bound.error is not None:
            logger.warning("tool.rejected", tool=name, error=bound.error)
            return ToolResult.error(bound.error)

        try:
            result = ToolResult.from_value(entry.func(*bound.args, **bound.kwargs))
        except Exception as exc:  # noqa: BLE001 - tool failures are returned as data
            logger.warning("tool.failed", tool=name, error=str(exc), error_type=type(exc).__name__)
            return ToolResult.error(str(exc))
        logger.debug("tool.completed", tool=name, items=len(result.content))
        return result


def collect_tools(target: object) -> list[tuple[ToolDescriptor, Callable[..., Any]]]:
    """Return a descriptor and bound callable for every marked method of ``target``."""
    found: list[tuple[ToolDescriptor, Callable[..., Any]]] = []
    for attr_name, member in inspect.getmembers(type(target)):
        marker = tool_marker(member)
        if marker is None:
            continue
        bound = getattr(target, attr_name)
        found.append((describe_callable(bound, name=attr_name, description=marker.description), bound))
    return found


def register_tools(server: ToolServer, target: object) -> list[ToolDescriptor]:
    """Register every ``llm_tool`` method of ``target`` with ``server``.

    Returns the registered descriptors; an object without marked methods
    registers nothing. Names are checked before anything is added, so a
    :class:`DuplicateToolError` leaves ``server`` unchanged.
    """
    collected = collect_tools(target)
    taken = set(server.names())
    for descriptor, _ in collected:
        if descriptor.name in taken:
            raise DuplicateToolError(descriptor.name)
        taken.add(descriptor.name)

    registered: list[ToolDescriptor] = []
    for descriptor, func in collected:
        server.add_tool(descriptor, func)
        registered.append(descriptor)
    logger.info(
        "tools.registered",
        target=type(target).__name__,
        tools=[descriptor.name for descriptor in registered],
    )
    return registered
