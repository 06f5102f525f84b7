"""Structlog configuration helpers for structured logging."""

from __future__ import annotations

import logging

import structlog


DEFAULT_LOG_LEVEL = "INFO"


def _renderer(log_format: str):
    if log_format == "console":
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def configure_logging(level: str = DEFAULT_LOG_LEVEL, log_format: str = "json") -> None:
    """Configure structlog and the stdlib root logger.

    ``log_format`` selects between JSON lines (the default, for deployments) and
    structlog's coloured console output for local development.
    """

    timestamper = structlog.processors.TimeStamper(fmt="iso")
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            timestamper,
            structlog.processors.format_exc_info,
            _renderer(log_format),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO))
