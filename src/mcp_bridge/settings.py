"""Application settings loaded from environment variables."""

from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SYSTEM_PROMPT = "You are a helpful assistant that answers questions."


class Settings(BaseSettings):
    """Configuration object for the bridge runtime."""

    model_config = SettingsConfigDict(env_prefix="MCP_BRIDGE_", env_file=".env", extra="allow")

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # OpenAI credentials use the variable names the OpenAI SDK reads.
    openai_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("openai_api_key", "OPENAI_API_KEY"),
    )
    openai_org_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("openai_org_id", "OPENAI_ORG_ID"),
    )
    openai_project_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("openai_project_id", "OPENAI_PROJECT_ID"),
    )
    openai_base_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("openai_base_url", "OPENAI_BASE_URL"),
    )

    # Conversation
    openai_model: str = "gpt-4o"
    max_tokens: int = 1000
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    max_rounds: int | None = None
    request_timeout_s: float = 60.0

    # Tool server
    mcp_transport: Literal["sse", "streamable-http"] = "sse"
    server_name: str = "mcp-bridge"
    server_host: str = "127.0.0.1"
    server_port: int = 8080
