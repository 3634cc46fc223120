"""Project service with global title uniqueness.

Uniqueness Guard:
    1. Trim the title
    2. Look for another project with the same title (case-sensitive)
    3. Found -> ProjectTitleConflictError
    4. Write; a DuplicateKeyError from the store's unique index is
       converted into the same ProjectTitleConflictError

Step 4 covers the race where two creates both pass step 2: exactly one
write wins at the index and the other caller still sees a 409.

The guard runs identically for every role. Only deletion is restricted
(admin).
"""

from __future__ import annotations

from uuid import UUID

import structlog

from taskhub.application.ports.entity_store import Collection, EntityStoreProtocol
from taskhub.application.services.authorization_policy import ensure_admin
from taskhub.domain.errors import (
    DuplicateKeyError,
    InvalidInputError,
    ProjectNotFoundError,
    ProjectTitleConflictError,
)
from taskhub.domain.models.actor import ActorIdentity
from taskhub.domain.models.project import Project, normalize_title
from taskhub.domain.value_objects.filter_expression import (
    FieldEquals,
    FilterExpression,
    SortSpec,
)

logger = structlog.get_logger(__name__)

PROJECT_SORT = SortSpec("created_at", descending=True)


class ProjectService:
    """Create, read, update and delete projects.

    Example:
        >>> service = ProjectService(store)
        >>> project = await service.create_project(actor, "Alpha")
        >>> await service.create_project(actor, " Alpha ")  # ProjectTitleConflictError
    """

    def __init__(self, store: EntityStoreProtocol) -> None:
        self._store = store
        self._log = logger.bind(service="project_service")

    async def list_projects(self, actor: ActorIdentity) -> list[Project]:
        """All projects, newest first. Visible to every authenticated actor."""
        records = await self._store.find(Collection.PROJECTS, sort=PROJECT_SORT)
        return [Project.from_record(record) for record in records]

    async def get_project(self, actor: ActorIdentity, project_id: UUID) -> Project:
        """Return a project or raise ProjectNotFoundError."""
        record = await self._store.find_one(
            Collection.PROJECTS, FieldEquals("id", project_id)
        )
        if record is None:
            raise ProjectNotFoundError(project_id)
        return Project.from_record(record)

    async def create_project(
        self,
        actor: ActorIdentity,
        title: str,
        description: str | None = None,
    ) -> Project:
        """Create a project with a globally unique trimmed title.

        Raises:
            InvalidInputError: If the title is empty after trimming.
            ProjectTitleConflictError: If the title is already taken.
        """
        normalized = self._require_title(title)
        log = self._log.bind(actor_id=str(actor.id), title=normalized)

        await self._ensure_title_free(normalized)

        project = Project(
            title=normalized,
            description=description.strip() if description else "",
        )
        try:
            await self._store.insert(Collection.PROJECTS, project.to_record())
        except DuplicateKeyError:
            log.info("project_title_conflict_at_store")
            raise ProjectTitleConflictError(normalized) from None

        log.info("project_created", project_id=str(project.id))
        return project

    async def update_project(
        self,
        actor: ActorIdentity,
        project_id: UUID,
        title: str,
        description: str | None = None,
    ) -> Project:
        """Replace a project's title and description.

        Raises:
            ProjectNotFoundError: If the id does not resolve.
            InvalidInputError: If the title is empty after trimming.
            ProjectTitleConflictError: If another project holds the title.
        """
        current = await self.get_project(actor, project_id)
        normalized = self._require_title(title)
        log = self._log.bind(
            actor_id=str(actor.id), project_id=str(project_id), title=normalized
        )

        await self._ensure_title_free(normalized, exclude_id=project_id)

        updated = current.with_details(normalized, description)
        try:
            record = await self._store.update_by_id(
                Collection.PROJECTS,
                project_id,
                {
                    "title": updated.title,
                    "description": updated.description,
                    "updated_at": updated.updated_at,
                },
            )
        except DuplicateKeyError:
            log.info("project_title_conflict_at_store")
            raise ProjectTitleConflictError(normalized) from None

        if record is None:
            raise ProjectNotFoundError(project_id)

        log.info("project_updated")
        return Project.from_record(record)

    async def delete_project(self, actor: ActorIdentity, project_id: UUID) -> None:
        """Delete a project (admin only). Tasks keep their dangling project_id."""
        ensure_admin(actor)
        deleted = await self._store.delete_by_id(Collection.PROJECTS, project_id)
        if not deleted:
            raise ProjectNotFoundError(project_id)
        self._log.info(
            "project_deleted", actor_id=str(actor.id), project_id=str(project_id)
        )

    @staticmethod
    def _require_title(title: str | None) -> str:
        normalized = normalize_title(title or "")
        if not normalized:
            raise InvalidInputError("Project title is required")
        return normalized

    async def _ensure_title_free(
        self, title: str, exclude_id: UUID | None = None
    ) -> None:
        query: FilterExpression = FieldEquals("title", title)
        records = await self._store.find(Collection.PROJECTS, query)
        if any(record["id"] != exclude_id for record in records):
            raise ProjectTitleConflictError(title)

