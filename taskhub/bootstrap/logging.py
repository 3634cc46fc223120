"""Bootstrap wiring for logging configuration."""

from __future__ import annotations

from taskhub.config import AppConfig
from taskhub.infrastructure.observability import configure_structlog as _configure_structlog


def configure_logging(config: AppConfig) -> None:
    """Configure structlog for the configured environment and level."""
    _configure_structlog(environment=config.environment, log_level=config.log_level)


__all__ = ["configure_logging"]
