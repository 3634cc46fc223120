"""Project domain errors."""

from __future__ import annotations

from uuid import UUID

from taskhub.domain.errors.base import ConflictError, NotFoundError


class ProjectNotFoundError(NotFoundError):
    """Raised when a project id does not resolve (HTTP 404)."""

    def __init__(self, project_id: UUID) -> None:
        self.project_id = project_id
        super().__init__("Project not found")


class ProjectTitleConflictError(ConflictError):
    """Raised when another project already owns the trimmed title (HTTP 409).

    Raised both by the pre-write uniqueness check and when the store's
    unique index rejects the write after a concurrent insert won the race.

    Attributes:
        title: The trimmed title that collided.
    """

    def __init__(self, title: str) -> None:
        self.title = title
        super().__init__("Project with this title already exists")
