"""Blocking MCP client used by the conversation driver."""

from __future__ import annotations

from contextlib import ExitStack, asynccontextmanager
from datetime import timedelta
from typing import TYPE_CHECKING, Any, Literal

import mcp.types as mcp_types
import structlog
from anyio.from_thread import BlockingPortal, start_blocking_portal
from mcp import ClientSession
from mcp.client.sse import sse_client
from mcp.client.streamable_http import streamablehttp_client
from mcp.shared.exceptions import McpError

from mcp_bridge.exceptions import NotConnectedError, ToolServerConnectionError
from mcp_bridge.models import RemoteTool, TextContent, ToolResult

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Mapping
    from types import TracebackType

logger = structlog.get_logger(__name__)

Transport = Literal["sse", "streamable-http"]


def _content_text(item: Any) -> str:
    """Render one MCP content block as text."""
    if isinstance(item, mcp_types.TextContent):
        return item.text
    return f"[{getattr(item, 'type', 'unknown')} content]"


def to_tool_result(result: mcp_types.CallToolResult) -> ToolResult:
    """Convert an MCP call result into the bridge result envelope."""
    return ToolResult(
        content=[TextContent(text=_content_text(item)) for item in result.content],
        is_error=bool(result.isError),
    )


class McpToolClient:
    """Synchronous facade over an asynchronous MCP client session.

    The session lives on an event loop running in a background thread; each
    public method blocks until its request completes. Not safe for use by
    several threads at once.
    """

    def __init__(self, transport: Transport = "sse", timeout_s: float = 60.0) -> None:
        """Configure the transport and per-request read timeout."""
        self.transport = transport
        self.timeout_s = timeout_s
        self.server_info: mcp_types.Implementation | None = None
        self._stack: ExitStack | None = None
        self._portal: BlockingPortal | None = None
        self._session: ClientSession | None = None

    def __enter__(self) -> McpToolClient:
        """Return the client for use in a ``with`` block."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Close the connection when leaving a ``with`` block."""
        self.close()

    @property
    def connected(self) -> bool:
        """Return ``True`` once the handshake has completed."""
        return self._session is not None

    @asynccontextmanager
    async def _open_streams(self, url: str) -> AsyncIterator[tuple[Any, Any]]:
        if self.transport == "streamable-http":
            async with streamablehttp_client(url) as (read_stream, write_stream, _):
                yield read_stream, write_stream
        else:
            async with sse_client(url) as (read_stream, write_stream):
                yield read_stream, write_stream

    @asynccontextmanager
    async def _session_scope(
        self,
        url: str,
    ) -> AsyncIterator[tuple[ClientSession, mcp_types.InitializeResult]]:
        async with self._open_streams(url) as (read_stream, write_stream):
            async with ClientSession(
                read_stream,
                write_stream,
                read_timeout_seconds=timedelta(seconds=self.timeout_s),
            ) as session:
                initialized = await session.initialize()
                yield session, initialized

    def connect(self, url: str) -> None:
        """Perform the MCP handshake with the server at ``url``.

        Raises:
            ToolServerConnectionError: if the server cannot be reached or the
                handshake fails.
        """
        if self._session is not None:
            message = "client is already connected; close it before reconnecting"
            raise RuntimeError(message)
        try:
            with ExitStack() as stack:
                portal = stack.enter_context(start_blocking_portal())
                session, initialized = stack.enter_context(
                    portal.wrap_async_context_manager(self._session_scope(url)),
                )
                self._stack = stack.pop_all()
        except Exception as exc:
            raise ToolServerConnectionError(url, str(exc)) from exc
        self._portal = portal
        self._session = session
        self.server_info = initialized.serverInfo
        logger.info(
            "mcp.connected",
            url=url,
            transport=self.transport,
            server=initialized.serverInfo.name,
            version=initialized.serverInfo.version,
        )

    def _require_session(self) -> tuple[BlockingPortal, ClientSession]:
        if self._portal is None or self._session is None:
            message = "not connected to a tool server; call connect() first"
            raise NotConnectedError(message)
        return self._portal, self._session

    def list_tools(self) -> list[RemoteTool]:
        """Return every tool advertised by the server."""
        portal, session = self._require_session()
        listing = portal.call(session.list_tools)
        return [
            RemoteTool(name=tool.name, description=tool.description or "", input_schema=tool.inputSchema)
            for tool in listing.tools
        ]

    def call_tool(self, name: str, arguments: Mapping[str, str]) -> ToolResult:
        """Invoke a tool; protocol errors for this call become error results."""
        portal, session = self._require_session()
        try:
            result = portal.call(session.call_tool, name, dict(arguments))
        except McpError as exc:
            logger.warning("mcp.call_failed", tool=name, error=str(exc))
            return ToolResult.error(str(exc))
        return to_tool_result(result)

    def close(self) -> None:
        """Close the session and stop the background event loop."""
        stack, self._stack = self._stack, None
        self._portal = None
        self._session = None
        if stack is not None:
            stack.close()
            logger.info("mcp.closed")
