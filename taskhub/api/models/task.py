"""Task request/response models.

Task responses carry both the raw reference ids and the resolved
entities. A resolved entity is null when the reference is unset or no
longer points at anything.
"""

from uuid import UUID

from pydantic import BaseModel, Field

from taskhub.api.models.common import DateTimeWithZ
from taskhub.api.models.project import ProjectRef
from taskhub.api.models.user import UserRef
from taskhub.application.services.task_service import TaskDetails, TaskStats


class TaskResponse(BaseModel):
    id: UUID
    heading: str
    description: str
    status: str = Field(..., examples=["TO_DO"])
    created_by: UserRef | None
    assigned_to: UserRef | None
    project: ProjectRef | None
    created_by_id: UUID
    assigned_to_id: UUID | None
    project_id: UUID | None
    project_label: str | None
    file_path: str | None
    created_date: DateTimeWithZ
    in_progress_date: DateTimeWithZ | None
    completion_date: DateTimeWithZ | None

    @classmethod
    def from_details(cls, details: TaskDetails) -> "TaskResponse":
        task = details.task
        return cls(
            id=task.id,
            heading=task.heading,
            description=task.description,
            status=task.status.value,
            created_by=UserRef.from_domain(details.creator) if details.creator else None,
            assigned_to=(
                UserRef.from_domain(details.assignee) if details.assignee else None
            ),
            project=ProjectRef.from_domain(details.project) if details.project else None,
            created_by_id=task.created_by,
            assigned_to_id=task.assigned_to,
            project_id=task.project_id,
            project_label=task.project_label,
            file_path=task.file_path,
            created_date=task.created_date,
            in_progress_date=task.in_progress_date,
            completion_date=task.completion_date,
        )


class StatusUpdateRequest(BaseModel):
    """Status change; ``project_id`` is applied only when present in the body."""

    status: str = Field(..., examples=["IN_PROGRESS"])
    project_id: UUID | None = None


class AssigneeUpdateRequest(BaseModel):
    """Null or missing ``assignee_id`` clears the assignee."""

    assignee_id: UUID | None = None


class TaskStatsResponse(BaseModel):
    total: int
    todo: int
    in_progress: int
    done: int
    completion_rate: int = Field(..., description="Whole percentage of DONE tasks")

    @classmethod
    def from_stats(cls, stats: TaskStats) -> "TaskStatsResponse":
        return cls(
            total=stats.total,
            todo=stats.todo,
            in_progress=stats.in_progress,
            done=stats.done,
            completion_rate=stats.completion_rate,
        )
