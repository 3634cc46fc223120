"""Task domain model.

Task is the central entity. Its references to users and projects are
weak: created_by, assigned_to and project_id are plain ids with no
referential integrity, and readers must tolerate ids that no longer
resolve.

Timestamps:
    created_date: Set at creation.
    in_progress_date: Set the first time status becomes IN_PROGRESS.
    completion_date: Set the first time status becomes DONE.

The last two are set-once. Status changes go through
taskhub.domain.services.task_lifecycle, never through dataclasses.replace
on the status field directly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar
from uuid import UUID, uuid4

from taskhub.domain.models.timestamps import ensure_utc, utc_now


class TaskStatus(Enum):
    """Status of a task.

    Any status may move to any other; only the timestamp side effects
    differ (see task_lifecycle).
    """

    TO_DO = "TO_DO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


@dataclass(frozen=True, eq=True)
class Task:
    """A unit of work created by a user and optionally assigned to another.

    Attributes:
        heading: Trimmed, required title.
        created_by: Id of the creating user.
        id: Unique identifier.
        description: Trimmed description, empty when not given.
        status: Current status.
        assigned_to: Id of the assignee, if any.
        project_id: Id of the project, if any.
        project_label: Legacy free-text project name, if any.
        file_path: Handle returned by file storage for the attachment, if any.
        created_date: Creation timestamp (UTC).
        in_progress_date: First time the task entered IN_PROGRESS (UTC).
        completion_date: First time the task entered DONE (UTC).
    """

    heading: str
    created_by: UUID
    id: UUID = field(default_factory=uuid4)
    description: str = ""
    status: TaskStatus = TaskStatus.TO_DO
    assigned_to: UUID | None = None
    project_id: UUID | None = None
    project_label: str | None = None
    file_path: str | None = None
    created_date: datetime = field(default_factory=utc_now)
    in_progress_date: datetime | None = None
    completion_date: datetime | None = None

    MAX_HEADING_LENGTH: ClassVar[int] = 200
    MAX_DESCRIPTION_LENGTH: ClassVar[int] = 1000

    def __post_init__(self) -> None:
        """Validate task fields."""
        if not self.heading:
            raise ValueError("Heading is required")
        if len(self.heading) > self.MAX_HEADING_LENGTH:
            raise ValueError(
                f"Heading exceeds maximum length of {self.MAX_HEADING_LENGTH} characters"
            )
        if len(self.description) > self.MAX_DESCRIPTION_LENGTH:
            raise ValueError(
                f"Description exceeds maximum length of {self.MAX_DESCRIPTION_LENGTH} characters"
            )

    def involves(self, user_id: UUID) -> bool:
        """True when the user created the task or is assigned to it."""
        return user_id == self.created_by or (
            self.assigned_to is not None and user_id == self.assigned_to
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "heading": self.heading,
            "description": self.description,
            "status": self.status.value,
            "created_by": self.created_by,
            "assigned_to": self.assigned_to,
            "project_id": self.project_id,
            "project_label": self.project_label,
            "file_path": self.file_path,
            "created_date": self.created_date,
            "in_progress_date": self.in_progress_date,
            "completion_date": self.completion_date,
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Task:
        return cls(
            id=record["id"],
            heading=record["heading"],
            description=record.get("description") or "",
            status=TaskStatus(record["status"]),
            created_by=record["created_by"],
            assigned_to=record.get("assigned_to"),
            project_id=record.get("project_id"),
            project_label=record.get("project_label"),
            file_path=record.get("file_path"),
            created_date=ensure_utc(record["created_date"]) or utc_now(),
            in_progress_date=ensure_utc(record.get("in_progress_date")),
            completion_date=ensure_utc(record.get("completion_date")),
        )
