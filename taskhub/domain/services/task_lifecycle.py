"""Task status lifecycle.

Status Machine:
    Any of TO_DO, IN_PROGRESS, DONE may move to any other. No ordering
    is enforced; what the lifecycle enforces is the timestamp side effect
    of entering a status:

    -> IN_PROGRESS : in_progress_date = now, only if unset
    -> DONE        : completion_date = now, only if unset
    -> TO_DO       : no timestamp change

    Once set, in_progress_date and completion_date are never cleared or
    overwritten, including after moving back to TO_DO.

Re-applying the current status is a no-op and returns the same task.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime

from taskhub.domain.errors import InvalidStatusError
from taskhub.domain.models.task import Task, TaskStatus
from taskhub.domain.models.timestamps import utc_now

LIFECYCLE_FIELDS = ("in_progress_date", "completion_date")


def parse_status(value: object) -> TaskStatus:
    """Parse a requested status.

    Args:
        value: A TaskStatus or its string value.

    Returns:
        The matching TaskStatus.

    Raises:
        InvalidStatusError: If value is not one of the three statuses.
    """
    if isinstance(value, TaskStatus):
        return value
    if isinstance(value, str):
        try:
            return TaskStatus(value)
        except ValueError:
            pass
    raise InvalidStatusError(value)


def apply_status(task: Task, target: TaskStatus, now: datetime | None = None) -> Task:
    """Move a task to ``target`` and apply set-once timestamps.

    Args:
        task: The task as currently stored.
        target: Requested status.
        now: Transition time; defaults to current UTC time.

    Returns:
        The task with the new status and timestamps. The same instance
        when the status does not change.
    """
    if target is task.status:
        return task

    at = now or utc_now()
    in_progress_date = task.in_progress_date
    completion_date = task.completion_date

    if target is TaskStatus.IN_PROGRESS and in_progress_date is None:
        in_progress_date = at
    elif target is TaskStatus.DONE and completion_date is None:
        completion_date = at

    return replace(
        task,
        status=target,
        in_progress_date=in_progress_date,
        completion_date=completion_date,
    )


def status_changes(before: Task, after: Task) -> dict[str, object]:
    """Return the status field to write for a transition, if any."""
    if before.status is after.status:
        return {}
    return {"status": after.status.value}


def timestamp_claims(before: Task, after: Task) -> dict[str, object]:
    """Return the lifecycle timestamps a transition sets from unset.

    Stores apply these only where the stored value is still null, so a
    concurrent writer can neither clear nor overwrite a set timestamp.
    """
    return {
        name: getattr(after, name)
        for name in LIFECYCLE_FIELDS
        if getattr(before, name) is None and getattr(after, name) is not None
    }
