"""Exception handlers translating errors into the response envelope.

    InvalidInputError      -> 400
    AuthenticationError    -> 401
    ForbiddenError         -> 403
    NotFoundError          -> 404
    ConflictError          -> 409 (includes an escaped DuplicateKeyError)
    RequestValidationError -> 400 with errors [{field, message}]
    HTTPException          -> its status code
    anything else          -> 500, logged, message redacted
"""

from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskhub.api.models.common import FieldError, error_body
from taskhub.domain.errors import (
    AuthenticationError,
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
)
from taskhub.domain.exceptions import TaskHubError

logger = structlog.get_logger(__name__)

# Checked in order; the first matching base wins
STATUS_BY_ERROR: tuple[tuple[type[TaskHubError], int], ...] = (
    (InvalidInputError, 400),
    (AuthenticationError, 401),
    (ForbiddenError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
)

INTERNAL_ERROR_MESSAGE = "Internal server error"

REQUEST_SECTIONS = frozenset({"body", "query", "path", "header", "cookie"})


def status_for(error: TaskHubError) -> int:
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status_code
    return 500


def _field_name(location: tuple[Any, ...]) -> str:
    parts = [str(part) for part in location if part not in REQUEST_SECTIONS]
    return ".".join(parts) or "request"


def _validation_message(error: dict[str, Any]) -> str:
    message = str(error.get("msg", "Invalid value"))
    # pydantic prefixes messages raised from validators
    return message.removeprefix("Value error, ")


async def taskhub_error_handler(request: Request, exc: TaskHubError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code == 500:
        return await unexpected_error_handler(request, exc)
    logger.info(
        "request_rejected",
        path=request.url.path,
        status_code=status_code,
        error_type=type(exc).__name__,
    )
    return JSONResponse(status_code=status_code, content=error_body(exc.message))


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = [
        FieldError(
            field=_field_name(tuple(error.get("loc", ()))),
            message=_validation_message(error),
        )
        for error in exc.errors()
    ]
    logger.info(
        "request_validation_failed",
        path=request.url.path,
        fields=[error.field for error in errors],
    )
    return JSONResponse(
        status_code=400, content=error_body("Validation Error", errors)
    )


async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(message),
        headers=getattr(exc, "headers", None),
    )


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content=error_body(INTERNAL_ERROR_MESSAGE))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TaskHubError, taskhub_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unexpected_error_handler)
