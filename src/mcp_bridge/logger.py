"""Structured logging configuration for the bridge."""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


def _level_number(level: str) -> int:
    """Translate a level name such as ``"debug"`` into its numeric value."""
    return getattr(logging, level.upper(), logging.INFO)


def configure(level: str = "INFO", json_out: bool = True) -> structlog.BoundLogger:
    """Configure structlog for the application and return a bound logger."""
    numeric_level = _level_number(level)
    logging.basicConfig(level=numeric_level, stream=sys.stderr, force=True)
    renderer: Any = structlog.processors.JSONRenderer() if json_out else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        context_class=dict,
        cache_logger_on_first_use=True,
    )
    return structlog.get_logger("mcp_bridge")
