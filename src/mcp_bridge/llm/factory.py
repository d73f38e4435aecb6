"""Factory for LLM clients."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from openai import OpenAI

if TYPE_CHECKING:
    from mcp_bridge.settings import Settings


def create_openai_client(settings: Settings) -> OpenAI:
    """Create an OpenAI client using application settings."""
    api_key = settings.openai_api_key

    if not api_key:
        message = "OpenAI API key is not configured."
        raise ValueError(message)

    options: dict[str, Any] = {"api_key": api_key, "timeout": settings.request_timeout_s}
    if settings.openai_org_id:
        options["organization"] = settings.openai_org_id
    if settings.openai_project_id:
        options["project"] = settings.openai_project_id
    if settings.openai_base_url:
        options["base_url"] = settings.openai_base_url

    return OpenAI(**options)
