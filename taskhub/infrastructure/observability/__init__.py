"""Observability: structlog configuration and request correlation ids."""

from taskhub.infrastructure.observability.correlation import (
    correlation_id_processor,
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from taskhub.infrastructure.observability.logging import (
    configure_structlog,
    resolve_log_level,
)

__all__: list[str] = [
    "configure_structlog",
    "correlation_id_processor",
    "generate_correlation_id",
    "get_correlation_id",
    "resolve_log_level",
    "set_correlation_id",
]
