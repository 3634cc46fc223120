"""Authorization policy for tasks, users and projects.

Role rules:
    admin  - view and mutate any task, manage users, delete projects,
             edit/reassign/delete tasks, list tasks per user.
    user   - view or mutate a task only when they created it or are
             assigned to it.

The predicates are pure functions over an explicit ActorIdentity. The
``ensure_*`` variants raise the matching ForbiddenError and are what the
services call at the top of each operation.
"""

from __future__ import annotations

from uuid import UUID

import structlog

from taskhub.domain.errors import AdminRequiredError, TaskAccessDeniedError
from taskhub.domain.models.actor import ActorIdentity
from taskhub.domain.models.task import Task
from taskhub.domain.value_objects.auth_scope import scope_for

logger = structlog.get_logger(__name__)


def is_admin(actor: ActorIdentity) -> bool:
    return actor.is_admin


def can_view(actor: ActorIdentity, task: Task) -> bool:
    """True when the task is inside the actor's visibility scope."""
    return scope_for(actor).permits(task)


def can_mutate(actor: ActorIdentity, task: Task) -> bool:
    """Status changes follow the same rule as visibility."""
    return scope_for(actor).permits(task)


def ensure_can_view(actor: ActorIdentity, task: Task) -> None:
    """Raise TaskAccessDeniedError unless the actor may view the task."""
    if not can_view(actor, task):
        logger.warning(
            "task_view_denied",
            task_id=str(task.id),
            actor_id=str(actor.id),
        )
        raise TaskAccessDeniedError(task.id, actor.id)


def ensure_can_mutate(actor: ActorIdentity, task: Task) -> None:
    """Raise TaskAccessDeniedError unless the actor may change the task."""
    if not can_mutate(actor, task):
        logger.warning(
            "task_mutation_denied",
            task_id=str(task.id),
            actor_id=str(actor.id),
        )
        raise TaskAccessDeniedError(task.id, actor.id)


def ensure_admin(actor: ActorIdentity) -> None:
    """Raise AdminRequiredError unless the actor is an admin."""
    if not is_admin(actor):
        logger.warning("admin_required", actor_id=str(actor.id))
        raise AdminRequiredError()


def resolve_assignee(actor: ActorIdentity, requested: UUID | None) -> UUID | None:
    """Return the assignee to store on a new task.

    Only admins choose an assignee at creation. A non-admin request is
    dropped without error.
    """
    if requested is None or is_admin(actor):
        return requested
    logger.debug(
        "assignee_discarded",
        actor_id=str(actor.id),
        requested=str(requested),
    )
    return None
