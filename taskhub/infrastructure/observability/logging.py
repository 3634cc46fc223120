"""Structured logging configuration with structlog.

Two output modes:
    production   - one JSON object per line, for log aggregation
    anything else - colored console output

Log Entry Format (production):
    {
        "timestamp": "2026-01-01T00:00:00.000000Z",
        "level": "info",
        "event": "task_created",
        "correlation_id": "uuid",
        "service": "task_service",
        ...bound context
    }

Usage:
    configure_structlog(environment="production", log_level="INFO")

    logger = structlog.get_logger(__name__)
    logger.info("event_name", key="value")
"""

import logging
from typing import cast

import structlog
from structlog.typing import Processor

from taskhub.infrastructure.observability.correlation import correlation_id_processor

DEFAULT_LOG_LEVEL = "INFO"


def resolve_log_level(level_name: str | None) -> int:
    """Map a level name to its logging constant; unknown names fall back to INFO."""
    name = (level_name or DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def configure_structlog(
    environment: str = "production", log_level: str | None = None
) -> None:
    """Configure structlog once at application startup.

    Args:
        environment: 'production' selects the JSON renderer.
        log_level: Minimum level name (DEBUG, INFO, ...).
    """
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        cast(Processor, correlation_id_processor),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if environment == "production":
        final_processor: Processor = structlog.processors.JSONRenderer()
    else:
        final_processor = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [final_processor],
        wrapper_class=structlog.make_filtering_bound_logger(
            resolve_log_level(log_level)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
