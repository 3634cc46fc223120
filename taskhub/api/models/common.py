"""Response envelope shared by every endpoint.

Every response has the shape::

    {"success": bool, "message"?: str, "data"?: ..., "count"?: int,
     "errors"?: [{"field": str, "message": str}]}

Top-level members that are not set are omitted from the JSON. Values
inside ``data`` are serialized as-is, so a null assignee stays ``null``.
"""

from datetime import datetime
from typing import Annotated, Any, Generic, TypeVar

from pydantic import (
    BaseModel,
    Field,
    PlainSerializer,
    SerializerFunctionWrapHandler,
    model_serializer,
)

T = TypeVar("T")

# ISO 8601 with Z suffix
DateTimeWithZ = Annotated[
    datetime,
    PlainSerializer(
        lambda v: v.isoformat().replace("+00:00", "Z") if v else None, return_type=str
    ),
]


class FieldError(BaseModel):
    """One request validation failure."""

    field: str = Field(..., description="Offending field name")
    message: str = Field(..., description="What is wrong with it")


class ApiResponse(BaseModel, Generic[T]):
    """Success/failure envelope.

    Attributes:
        success: False for every error response.
        message: Human-readable outcome.
        data: Payload of a successful request.
        count: Number of items for list payloads.
        errors: Field-level validation failures.
    """

    success: bool = True
    message: str | None = None
    data: T | None = None
    count: int | None = None
    errors: list[FieldError] | None = None

    @model_serializer(mode="wrap")
    def _omit_absent(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        serialized = handler(self)
        return {key: value for key, value in serialized.items() if value is not None}


def error_body(message: str, errors: list[FieldError] | None = None) -> dict[str, Any]:
    """JSON body of an error response."""
    return ApiResponse[None](success=False, message=message, errors=errors).model_dump(
        mode="json"
    )
