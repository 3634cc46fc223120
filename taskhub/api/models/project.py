"""Project request/response models."""

from uuid import UUID

from pydantic import BaseModel, Field

from taskhub.api.models.common import DateTimeWithZ
from taskhub.domain.models.project import Project


class ProjectRequest(BaseModel):
    """Create or replace a project. The title is trimmed and must be unique."""

    title: str = Field(..., max_length=255, examples=["Website relaunch"])
    description: str | None = Field(default=None, max_length=2000)


class ProjectRef(BaseModel):
    """Compact project embedded in task responses."""

    id: UUID
    title: str
    description: str

    @classmethod
    def from_domain(cls, project: Project) -> "ProjectRef":
        return cls(id=project.id, title=project.title, description=project.description)


class ProjectResponse(ProjectRef):
    created_at: DateTimeWithZ
    updated_at: DateTimeWithZ

    @classmethod
    def from_domain(cls, project: Project) -> "ProjectResponse":
        return cls(
            id=project.id,
            title=project.title,
            description=project.description,
            created_at=project.created_at,
            updated_at=project.updated_at,
        )
