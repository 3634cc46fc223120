"""Project domain model.

Projects are a flat grouping for tasks. Deleting a project does not touch
its tasks: task.project_id is a weak reference and may dangle.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from taskhub.domain.models.timestamps import ensure_utc, utc_now


def normalize_title(title: str) -> str:
    """Titles are compared after trimming, case-sensitively."""
    return title.strip()


@dataclass(frozen=True)
class Project:
    """A named grouping of tasks.

    Attributes:
        id: Unique identifier.
        title: Trimmed, globally unique title.
        description: Trimmed description, empty when not given.
        created_at: Creation timestamp (UTC).
        updated_at: Last modification timestamp (UTC).
    """

    title: str
    description: str = ""
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        if not self.title:
            raise ValueError("Project title is required")

    def with_details(self, title: str, description: str | None) -> Project:
        return replace(
            self,
            title=normalize_title(title),
            description=description.strip() if description else "",
            updated_at=utc_now(),
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Project:
        return cls(
            id=record["id"],
            title=record["title"],
            description=record.get("description") or "",
            created_at=ensure_utc(record["created_at"]) or utc_now(),
            updated_at=ensure_utc(record.get("updated_at")) or utc_now(),
        )
