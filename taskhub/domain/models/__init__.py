"""Domain models for TaskHub."""

from taskhub.domain.models.actor import ActorIdentity, Role
from taskhub.domain.models.project import Project, normalize_title
from taskhub.domain.models.task import Task, TaskStatus
from taskhub.domain.models.user import User, normalize_email, normalize_username

__all__: list[str] = [
    "ActorIdentity",
    "Project",
    "Role",
    "Task",
    "TaskStatus",
    "User",
    "normalize_email",
    "normalize_title",
    "normalize_username",
]
