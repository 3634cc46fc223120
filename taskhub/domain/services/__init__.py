"""Pure domain services for TaskHub."""

from taskhub.domain.services.task_lifecycle import (
    LIFECYCLE_FIELDS,
    apply_status,
    parse_status,
    status_changes,
    timestamp_claims,
)

__all__: list[str] = [
    "LIFECYCLE_FIELDS",
    "apply_status",
    "parse_status",
    "status_changes",
    "timestamp_claims",
]
