"""Application services for TaskHub."""

from taskhub.application.services.credential_service import CredentialService
from taskhub.application.services.project_service import ProjectService
from taskhub.application.services.task_query_composer import (
    TASK_SORT,
    TaskQueryParams,
    build_task_filter,
)
from taskhub.application.services.task_service import (
    KEEP,
    Attachment,
    TaskDetails,
    TaskDraft,
    TaskService,
    TaskStats,
    TaskUpdate,
)
from taskhub.application.services.user_service import (
    AuthSession,
    InitialTask,
    UserService,
)

__all__: list[str] = [
    "KEEP",
    "TASK_SORT",
    "Attachment",
    "AuthSession",
    "CredentialService",
    "InitialTask",
    "ProjectService",
    "TaskDetails",
    "TaskDraft",
    "TaskQueryParams",
    "TaskService",
    "TaskStats",
    "TaskUpdate",
    "UserService",
    "build_task_filter",
]
