"""Exceptions raised across the bridge."""

from __future__ import annotations


class BridgeError(Exception):
    """Base class for errors raised by mcp-bridge."""


class DuplicateToolError(BridgeError, ValueError):
    """Raised when two tools are registered under the same name."""

    def __init__(self, name: str) -> None:
        """Initialise the error with the clashing tool name."""
        super().__init__(f"a tool named {name!r} is already registered")
        self.name = name


class NotConnectedError(BridgeError, RuntimeError):
    """Raised when the tool server is used before a connection exists."""


class ToolServerConnectionError(BridgeError, ConnectionError):
    """Raised when the handshake with the tool server fails."""

    def __init__(self, url: str, reason: str) -> None:
        """Initialise the error with the target URL and failure reason."""
        super().__init__(f"could not connect to tool server at {url}: {reason}")
        self.url = url


class ToolArgumentsError(BridgeError, ValueError):
    """Raised when model-issued tool arguments break the flat string-map contract."""


class ConversationLimitError(BridgeError, RuntimeError):
    """Raised when a conversation exceeds its configured number of rounds."""

    def __init__(self, max_rounds: int) -> None:
        """Initialise the error with the exhausted round budget."""
        super().__init__(f"conversation did not finish within {max_rounds} rounds")
        self.max_rounds = max_rounds


class ToolCallFailedError(BridgeError, RuntimeError):
    """Raised inside the MCP handler so the SDK emits an error-flagged result."""
