"""Logging middleware for correlation id propagation.

For every HTTP request:
- Takes the correlation id from ``X-Correlation-ID`` or generates one
- Sets it in context so every log line of the request carries it
- Logs request start and completion (status code, duration)
- Echoes the id back in the response header

Usage:
    app.add_middleware(LoggingMiddleware)
"""

import time
from collections.abc import Awaitable, Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from taskhub.infrastructure.observability.correlation import (
    generate_correlation_id,
    set_correlation_id,
)

CORRELATION_HEADER = "X-Correlation-ID"

logger = structlog.get_logger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Correlation id propagation and request logging."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or generate_correlation_id()
        set_correlation_id(correlation_id)

        log = logger.bind(
            method=request.method,
            path=request.url.path,
            client_host=request.client.host if request.client else None,
        )
        log.info("request_started")
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as exc:
            log.exception(
                "request_failed",
                duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
                error_type=type(exc).__name__,
            )
            raise

        log.info(
            "request_completed",
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
