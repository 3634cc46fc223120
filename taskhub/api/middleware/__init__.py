"""HTTP middleware for the TaskHub API."""

from taskhub.api.middleware.logging_middleware import (
    CORRELATION_HEADER,
    LoggingMiddleware,
)

__all__ = ["CORRELATION_HEADER", "LoggingMiddleware"]
