"""Task domain errors.

Raised by the task lifecycle and task service when a status value is
unknown, a task id does not resolve, or the actor is outside the task's
visibility scope.
"""

from __future__ import annotations

from uuid import UUID

from taskhub.domain.errors.base import ForbiddenError, InvalidInputError, NotFoundError


class InvalidStatusError(InvalidInputError):
    """Raised when a requested status is not TO_DO, IN_PROGRESS or DONE.

    HTTP Status: 400 Bad Request

    Attributes:
        status: The rejected value as received.
    """

    def __init__(self, status: object) -> None:
        """Initialize the error.

        Args:
            status: The rejected value as received.
        """
        self.status = status
        super().__init__("Invalid status. Must be TO_DO, IN_PROGRESS, or DONE")


class TaskNotFoundError(NotFoundError):
    """Raised when a task id does not resolve.

    HTTP Status: 404 Not Found

    Attributes:
        task_id: The task id that was not found.
    """

    def __init__(self, task_id: UUID) -> None:
        self.task_id = task_id
        super().__init__("Task not found")


class TaskAccessDeniedError(ForbiddenError):
    """Raised when a non-admin touches a task they neither created nor are assigned to.

    HTTP Status: 403 Forbidden

    Attributes:
        task_id: The task that was requested.
        actor_id: The actor that was denied.
    """

    def __init__(self, task_id: UUID, actor_id: UUID) -> None:
        self.task_id = task_id
        self.actor_id = actor_id
        super().__init__("Access denied")
