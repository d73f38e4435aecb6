"""Dependency injection container for mcp-bridge."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, cast

from mcp_bridge.conversation.driver import ConversationDriver
from mcp_bridge.llm.factory import create_openai_client
from mcp_bridge.logger import configure
from mcp_bridge.settings import Settings
from mcp_bridge.transport.client import McpToolClient
from mcp_bridge.transport.server import McpToolServer

if TYPE_CHECKING:  # pragma: no cover - typing only
    from structlog.stdlib import BoundLogger
else:  # pragma: no cover - runtime placeholder
    BoundLogger = object


@dataclass
class Container:
    """Aggregates configured application services."""

    settings: Settings
    logger: BoundLogger

    def tool_client(self) -> McpToolClient:
        """Create an MCP client using the configured transport and timeout."""
        return McpToolClient(
            transport=self.settings.mcp_transport,
            timeout_s=self.settings.request_timeout_s,
        )

    def driver(self) -> ConversationDriver:
        """Create a conversation driver backed by OpenAI and an MCP client."""
        return ConversationDriver(
            create_openai_client(self.settings),
            self.tool_client(),
            model=self.settings.openai_model,
            max_tokens=self.settings.max_tokens,
            system_prompt=self.settings.system_prompt,
            max_rounds=self.settings.max_rounds,
        )

    def tool_server(self) -> McpToolServer:
        """Create an empty MCP tool server named after the settings."""
        return McpToolServer(self.settings.server_name)


def build_container(settings: Settings | None = None) -> Container:
    """Build the dependency container using default settings."""
    resolved_settings = settings or Settings()
    logger = cast("BoundLogger", configure(resolved_settings.log_level, resolved_settings.log_json))
    logger.info(
        "boot",
        model=resolved_settings.openai_model,
        transport=resolved_settings.mcp_transport,
    )
    return Container(settings=resolved_settings, logger=logger)
