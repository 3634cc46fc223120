"""Task service.

Operations:
    list_tasks      - scoped listing with status/project/search filters
    get_task        - single task, view policy
    create_task     - any actor; assignee honoured for admins only
    update_status   - mutate policy; set-once lifecycle timestamps
    update_task     - admin partial update (fields, status, attachment)
    update_assignee - admin reassignment
    delete_task     - admin
    stats           - scoped counts per status and completion rate
    task_users      - distinct creators/assignees of visible tasks
    user_tasks      - admin listing of tasks assigned to one user

Every read returns TaskDetails: the task plus its creator, assignee and
project resolved from their weak references. A reference that no longer
resolves is rendered as None rather than failing the request.

Every write touches the task record once, through a single
``update_by_id`` carrying all changed fields. Lifecycle timestamps go
as set-once claims, so a racing status change never clears one.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from uuid import UUID

import structlog

from taskhub.application.ports.entity_store import (
    Collection,
    EntityStoreProtocol,
    Record,
)
from taskhub.application.ports.file_storage import FileStorageProtocol
from taskhub.application.services.authorization_policy import (
    ensure_admin,
    ensure_can_mutate,
    ensure_can_view,
    resolve_assignee,
)
from taskhub.application.services.task_query_composer import (
    TASK_SORT,
    TaskQueryParams,
    build_task_filter,
)
from taskhub.domain.errors import (
    InvalidInputError,
    TaskNotFoundError,
    UserNotFoundError,
)
from taskhub.domain.models.actor import ActorIdentity
from taskhub.domain.models.project import Project
from taskhub.domain.models.task import Task, TaskStatus
from taskhub.domain.models.user import User
from taskhub.domain.services.task_lifecycle import (
    LIFECYCLE_FIELDS,
    apply_status,
    parse_status,
    status_changes,
    timestamp_claims,
)
from taskhub.domain.value_objects.auth_scope import scope_for
from taskhub.domain.value_objects.filter_expression import (
    FieldEquals,
    FieldIn,
    conjoin,
)

logger = structlog.get_logger(__name__)


class Keep(Enum):
    """Marker for 'leave this field as it is' in partial updates."""

    KEEP = "keep"


KEEP = Keep.KEEP


@dataclass(frozen=True)
class Attachment:
    """An uploaded file on its way to file storage."""

    filename: str
    content: bytes


@dataclass(frozen=True)
class TaskDraft:
    """Input for task creation.

    ``status`` is only set by admin registration's initial task; regular
    creation starts at TO_DO.
    """

    heading: str
    description: str | None = None
    assigned_to: UUID | None = None
    project_id: UUID | None = None
    project_label: str | None = None
    status: str | None = None


@dataclass(frozen=True)
class TaskUpdate:
    """Admin partial update. Fields left at KEEP are not touched.

    None clears assigned_to, project_id and project_label.
    """

    heading: str | Keep = KEEP
    description: str | Keep = KEEP
    status: str | Keep = KEEP
    assigned_to: UUID | None | Keep = KEEP
    project_id: UUID | None | Keep = KEEP
    project_label: str | None | Keep = KEEP


@dataclass(frozen=True)
class TaskDetails:
    """A task with its references resolved.

    Attributes:
        task: The stored task.
        creator: User from task.created_by, or None if it no longer exists.
        assignee: User from task.assigned_to, or None.
        project: Project from task.project_id, or None.
    """

    task: Task
    creator: User | None = None
    assignee: User | None = None
    project: Project | None = None


@dataclass(frozen=True)
class TaskStats:
    """Task counts inside the actor's scope.

    completion_rate is done/total as a whole percentage, 0 with no tasks.
    """

    total: int
    todo: int
    in_progress: int
    done: int
    completion_rate: int


def completion_rate(done: int, total: int) -> int:
    """Whole percentage, halves rounded up."""
    if total <= 0:
        return 0
    return math.floor(done * 100 / total + 0.5)


class TaskService:
    """Task operations, gated by the authorization policy.

    Example:
        >>> service = TaskService(store, file_storage)
        >>> details = await service.create_task(actor, TaskDraft(heading="Write docs"))
        >>> details = await service.update_status(actor, details.task.id, "IN_PROGRESS")
        >>> details.task.in_progress_date is not None
        True
    """

    def __init__(
        self, store: EntityStoreProtocol, file_storage: FileStorageProtocol
    ) -> None:
        self._store = store
        self._file_storage = file_storage
        self._log = logger.bind(service="task_service")

    # Reads

    async def list_tasks(
        self, actor: ActorIdentity, params: TaskQueryParams | None = None
    ) -> list[TaskDetails]:
        """Tasks visible to the actor matching ``params``, newest first.

        Raises:
            InvalidStatusError: params.status is not a known status.
        """
        query = build_task_filter(actor, params)
        records = await self._store.find(Collection.TASKS, query, sort=TASK_SORT)
        return await self._populate([Task.from_record(r) for r in records])

    async def get_task(self, actor: ActorIdentity, task_id: UUID) -> TaskDetails:
        """Raises TaskNotFoundError or TaskAccessDeniedError."""
        task = await self._load(task_id)
        ensure_can_view(actor, task)
        return (await self._populate([task]))[0]

    async def stats(self, actor: ActorIdentity) -> TaskStats:
        scope = scope_for(actor).to_filter()
        counts: dict[TaskStatus, int] = {}
        for status in TaskStatus:
            counts[status] = await self._store.count_where(
                Collection.TASKS,
                conjoin([scope, FieldEquals("status", status.value)]),
            )
        total = sum(counts.values())
        done = counts[TaskStatus.DONE]
        return TaskStats(
            total=total,
            todo=counts[TaskStatus.TO_DO],
            in_progress=counts[TaskStatus.IN_PROGRESS],
            done=done,
            completion_rate=completion_rate(done, total),
        )

    async def task_users(self, actor: ActorIdentity) -> list[User]:
        """Distinct users that created or are assigned to a visible task.

        Ids that no longer resolve to a user are skipped.
        """
        records = await self._store.find(
            Collection.TASKS, scope_for(actor).to_filter()
        )
        user_ids: set[UUID] = set()
        for record in records:
            if record.get("created_by") is not None:
                user_ids.add(record["created_by"])
            if record.get("assigned_to") is not None:
                user_ids.add(record["assigned_to"])
        users = await self._users_by_id(user_ids)
        return sorted(users.values(), key=lambda user: user.username)

    async def user_tasks(self, actor: ActorIdentity, user_id: UUID) -> list[TaskDetails]:
        """Tasks assigned to ``user_id``, newest first (admin only).

        Raises:
            AdminRequiredError: Actor is not an admin.
            UserNotFoundError: The user does not exist.
        """
        ensure_admin(actor)
        if not await self._users_by_id({user_id}):
            raise UserNotFoundError(user_id)
        records = await self._store.find(
            Collection.TASKS, FieldEquals("assigned_to", user_id), sort=TASK_SORT
        )
        return await self._populate([Task.from_record(r) for r in records])

    # Writes

    async def create_task(
        self,
        actor: ActorIdentity,
        draft: TaskDraft,
        attachment: Attachment | None = None,
    ) -> TaskDetails:
        """Create a task owned by the actor.

        A non-admin's ``assigned_to`` is dropped. A non-default
        ``draft.status`` gets the same timestamps as a transition from
        TO_DO.

        Raises:
            InvalidInputError: Heading missing or a field too long.
            InvalidStatusError: draft.status is not a known status.
        """
        log = self._log.bind(actor_id=str(actor.id))
        task = self.prepare_task(actor, draft)

        file_path = await self._store_attachment(attachment)
        if file_path is not None:
            task = replace(task, file_path=file_path)

        try:
            await self._store.insert(Collection.TASKS, task.to_record())
        except Exception:
            await self._discard_attachment(file_path)
            raise
        log.info("task_created", task_id=str(task.id), status=task.status.value)
        return (await self._populate([task]))[0]

    def prepare_task(self, actor: ActorIdentity, draft: TaskDraft) -> Task:
        """Validate ``draft`` and build the task without storing it.

        Raises:
            InvalidInputError: Heading missing or a field too long.
            InvalidStatusError: draft.status is not a known status.
        """
        target = parse_status(draft.status) if draft.status else TaskStatus.TO_DO
        task = _build_task(
            heading=(draft.heading or "").strip(),
            description=(draft.description or "").strip(),
            created_by=actor.id,
            assigned_to=resolve_assignee(actor, draft.assigned_to),
            project_id=draft.project_id,
            project_label=_clean_label(draft.project_label),
        )
        return apply_status(task, target, now=task.created_date)

    async def update_status(
        self,
        actor: ActorIdentity,
        task_id: UUID,
        status: str,
        project_id: UUID | None | Keep = KEEP,
    ) -> TaskDetails:
        """Move a task to ``status``; optionally set its project in the same write.

        Raises:
            TaskNotFoundError: Unknown task.
            TaskAccessDeniedError: Actor outside the task's scope.
            InvalidStatusError: Unknown status.
        """
        task = await self._load(task_id)
        ensure_can_mutate(actor, task)
        target = parse_status(status)

        updated = apply_status(task, target)
        if project_id is not KEEP:
            updated = replace(updated, project_id=project_id)

        task = await self._write(task, updated)
        self._log.info(
            "task_status_updated",
            actor_id=str(actor.id),
            task_id=str(task_id),
            status=target.value,
        )
        return (await self._populate([task]))[0]

    async def update_task(
        self,
        actor: ActorIdentity,
        task_id: UUID,
        update: TaskUpdate,
        attachment: Attachment | None = None,
    ) -> TaskDetails:
        """Admin partial update of a task.

        Raises:
            AdminRequiredError: Actor is not an admin.
            TaskNotFoundError: Unknown task.
            InvalidStatusError: Unknown status.
            InvalidInputError: Empty heading or a field too long.
        """
        ensure_admin(actor)
        task = await self._load(task_id)
        target = parse_status(update.status) if update.status is not KEEP else None

        fields: dict[str, object] = {}
        if update.heading is not KEEP:
            fields["heading"] = update.heading.strip()
        if update.description is not KEEP:
            fields["description"] = update.description.strip()
        if update.assigned_to is not KEEP:
            fields["assigned_to"] = update.assigned_to
        if update.project_id is not KEEP:
            fields["project_id"] = update.project_id
        if update.project_label is not KEEP:
            fields["project_label"] = _clean_label(update.project_label)

        updated = _replace_task(task, **fields)
        if target is not None:
            updated = apply_status(updated, target)
        file_path = await self._store_attachment(attachment)
        if file_path is not None:
            updated = replace(updated, file_path=file_path)

        try:
            task = await self._write(task, updated)
        except Exception:
            await self._discard_attachment(file_path)
            raise
        self._log.info("task_updated", actor_id=str(actor.id), task_id=str(task_id))
        return (await self._populate([task]))[0]

    async def update_assignee(
        self, actor: ActorIdentity, task_id: UUID, assignee_id: UUID | None
    ) -> TaskDetails:
        """Reassign a task (admin only). None clears the assignee."""
        ensure_admin(actor)
        task = await self._load(task_id)
        task = await self._write(task, replace(task, assigned_to=assignee_id))
        self._log.info(
            "task_assignee_updated",
            actor_id=str(actor.id),
            task_id=str(task_id),
            assignee_id=str(assignee_id) if assignee_id else None,
        )
        return (await self._populate([task]))[0]

    async def delete_task(self, actor: ActorIdentity, task_id: UUID) -> None:
        """Delete a task (admin only). Its attachment file is left on disk."""
        ensure_admin(actor)
        deleted = await self._store.delete_by_id(Collection.TASKS, task_id)
        if not deleted:
            raise TaskNotFoundError(task_id)
        self._log.info("task_deleted", actor_id=str(actor.id), task_id=str(task_id))

    # Helpers

    async def _load(self, task_id: UUID) -> Task:
        record = await self._store.find_one(Collection.TASKS, FieldEquals("id", task_id))
        if record is None:
            raise TaskNotFoundError(task_id)
        return Task.from_record(record)

    async def _store_attachment(self, attachment: Attachment | None) -> str | None:
        if attachment is None:
            return None
        return await self._file_storage.store(attachment.filename, attachment.content)

    async def _discard_attachment(self, file_path: str | None) -> None:
        """Remove an upload whose task write failed."""
        if file_path is None:
            return
        await self._file_storage.remove(file_path)
        self._log.warning("attachment_discarded", file_path=file_path)

    async def _write(self, before: Task, after: Task) -> Task:
        """Persist the fields that differ between ``before`` and ``after``."""
        changes = _changed_fields(before.to_record(), after.to_record())
        for name in LIFECYCLE_FIELDS:
            changes.pop(name, None)
        changes.update(status_changes(before, after))
        claims = timestamp_claims(before, after)
        if not changes and not claims:
            return before

        record = await self._store.update_by_id(
            Collection.TASKS, before.id, changes, set_once=claims
        )
        if record is None:
            raise TaskNotFoundError(before.id)
        return Task.from_record(record)

    async def _populate(self, tasks: list[Task]) -> list[TaskDetails]:
        user_ids: set[UUID] = set()
        project_ids: set[UUID] = set()
        for task in tasks:
            user_ids.add(task.created_by)
            if task.assigned_to is not None:
                user_ids.add(task.assigned_to)
            if task.project_id is not None:
                project_ids.add(task.project_id)

        users = await self._users_by_id(user_ids)
        projects = await self._projects_by_id(project_ids)
        return [
            TaskDetails(
                task=task,
                creator=users.get(task.created_by),
                assignee=users.get(task.assigned_to) if task.assigned_to else None,
                project=projects.get(task.project_id) if task.project_id else None,
            )
            for task in tasks
        ]

    async def _users_by_id(self, user_ids: set[UUID]) -> dict[UUID, User]:
        if not user_ids:
            return {}
        records = await self._store.find(Collection.USERS, FieldIn.of("id", user_ids))
        return {record["id"]: User.from_record(record) for record in records}

    async def _projects_by_id(self, project_ids: set[UUID]) -> dict[UUID, Project]:
        if not project_ids:
            return {}
        records = await self._store.find(
            Collection.PROJECTS, FieldIn.of("id", project_ids)
        )
        return {record["id"]: Project.from_record(record) for record in records}


def _clean_label(label: str | None) -> str | None:
    if label is None:
        return None
    return label.strip() or None


def _build_task(**fields: object) -> Task:
    if not fields.get("heading"):
        raise InvalidInputError("Heading is required")
    try:
        return Task(**fields)  # type: ignore[arg-type]
    except ValueError as e:
        raise InvalidInputError(str(e)) from e


def _replace_task(task: Task, **fields: object) -> Task:
    if "heading" in fields and not fields["heading"]:
        raise InvalidInputError("Heading is required")
    try:
        return replace(task, **fields)  # type: ignore[arg-type]
    except ValueError as e:
        raise InvalidInputError(str(e)) from e


def _changed_fields(before: Record, after: Record) -> Record:
    return {key: value for key, value in after.items() if before.get(key) != value}
