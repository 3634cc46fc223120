"""Request correlation ids.

The id lives in a ContextVar so it follows the request across awaits
without being passed through every call. LoggingMiddleware sets it from
the ``X-Correlation-ID`` header (or generates one) and
``correlation_id_processor`` copies it onto every log entry.

Usage:
    set_correlation_id(request.headers.get("X-Correlation-ID") or generate_correlation_id())
    ...
    log.info("task_created")  # carries correlation_id automatically
"""

from contextvars import ContextVar
from typing import Any
from uuid import uuid4

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def generate_correlation_id() -> str:
    return str(uuid4())


def get_correlation_id() -> str:
    """Current correlation id, or an empty string outside a request."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    _correlation_id.set(correlation_id)


def correlation_id_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor adding ``correlation_id`` when one is set."""
    correlation_id = get_correlation_id()
    if correlation_id:
        event_dict.setdefault("correlation_id", correlation_id)
    return event_dict
