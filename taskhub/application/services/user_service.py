"""User accounts: registration, login, administration and profile.

Username and email uniqueness use the same guard-plus-backstop shape as
project titles: a pre-write lookup raises UserAlreadyExistsError, and a
DuplicateKeyError from the store's unique indexes is converted into the
same error.

Public registration always creates a ``user``. Only admin registration
chooses a role, and it may also create an initial task assigned to the
new account.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from uuid import UUID

import structlog

from taskhub.application.ports.entity_store import Collection, EntityStoreProtocol
from taskhub.application.services.authorization_policy import ensure_admin
from taskhub.application.services.credential_service import CredentialService
from taskhub.application.services.task_service import TaskDraft, TaskService
from taskhub.domain.errors import (
    DuplicateKeyError,
    InvalidInputError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from taskhub.domain.models.actor import ActorIdentity, Role
from taskhub.domain.models.user import User, normalize_email, normalize_username
from taskhub.domain.value_objects.filter_expression import (
    AnyOf,
    FieldEquals,
    FilterExpression,
    SortSpec,
)

logger = structlog.get_logger(__name__)

USER_SORT = SortSpec("created_at", descending=True)

# (username, email, role) created by seed_users
SEED_ACCOUNTS: tuple[tuple[str, str, Role], ...] = (
    ("admin", "admin@example.com", Role.ADMIN),
    ("user1", "user1@example.com", Role.USER),
    ("user2", "user2@example.com", Role.USER),
    ("user3", "user3@example.com", Role.USER),
)


@dataclass(frozen=True)
class AuthSession:
    """Result of register/login: the account and a fresh token."""

    user: User
    token: str


@dataclass(frozen=True)
class InitialTask:
    """Task created alongside an admin-registered user.

    Attributes:
        heading: Task heading.
        description: Optional description.
        status: Initial status value, TO_DO when omitted.
        project_id: Project for the task; falls back to the registration's
            project_id.
    """

    heading: str
    description: str | None = None
    status: str | None = None
    project_id: UUID | None = None


class UserService:
    """Account operations on top of the entity store and credentials."""

    def __init__(
        self,
        store: EntityStoreProtocol,
        credentials: CredentialService,
        task_service: TaskService,
        seed_password: str = "password123",
    ) -> None:
        self._store = store
        self._credentials = credentials
        self._task_service = task_service
        self._seed_password = seed_password
        self._log = logger.bind(service="user_service")

    async def register(self, username: str, email: str, password: str) -> AuthSession:
        """Create a ``user`` account and log it in.

        Raises:
            UserAlreadyExistsError: Username or email already taken.
        """
        user = await self._create_user(username, email, password, Role.USER)
        token = self._credentials.issue_token(user.as_actor())
        self._log.info("user_registered", user_id=str(user.id))
        return AuthSession(user=user, token=token)

    async def login(self, username: str, password: str) -> AuthSession:
        """Check credentials and issue a token.

        Raises:
            InvalidCredentialsError: Unknown username or wrong password.
        """
        user = await self._credentials.check_credentials(username, password)
        token = self._credentials.issue_token(user.as_actor())
        self._log.info("user_logged_in", user_id=str(user.id))
        return AuthSession(user=user, token=token)

    async def admin_register(
        self,
        actor: ActorIdentity,
        username: str,
        email: str,
        password: str,
        role: Role = Role.USER,
        project_id: UUID | None = None,
        initial_task: InitialTask | None = None,
    ) -> User:
        """Create an account with any role (admin only).

        When ``initial_task`` is given, a task created by the admin and
        assigned to the new user is stored as well. The task is validated
        before the account is written.

        Raises:
            AdminRequiredError: Actor is not an admin.
            UserAlreadyExistsError: Username or email already taken.
            InvalidStatusError: initial_task.status is not a known status.
            InvalidInputError: initial_task has no heading or a field too long.
        """
        ensure_admin(actor)
        log = self._log.bind(actor_id=str(actor.id))

        draft = None
        if initial_task is not None:
            draft = TaskDraft(
                heading=initial_task.heading,
                description=initial_task.description,
                project_id=initial_task.project_id or project_id,
                status=initial_task.status,
            )
            self._task_service.prepare_task(actor, draft)

        user = await self._create_user(username, email, password, role)
        log.info("user_registered_by_admin", user_id=str(user.id), role=role.value)

        if draft is not None:
            details = await self._task_service.create_task(
                actor, replace(draft, assigned_to=user.id)
            )
            log.info(
                "initial_task_assigned",
                user_id=str(user.id),
                task_id=str(details.task.id),
            )
        return user

    async def list_users(self, actor: ActorIdentity) -> list[User]:
        """All users, newest first (admin only)."""
        ensure_admin(actor)
        records = await self._store.find(Collection.USERS, sort=USER_SORT)
        return [User.from_record(record) for record in records]

    async def get_user(self, actor: ActorIdentity, user_id: UUID) -> User:
        """One user by id (admin only)."""
        ensure_admin(actor)
        return await self._load(user_id)

    async def delete_user(self, actor: ActorIdentity, user_id: UUID) -> None:
        """Delete a user (admin only). Their tasks are left untouched."""
        ensure_admin(actor)
        deleted = await self._store.delete_by_id(Collection.USERS, user_id)
        if not deleted:
            raise UserNotFoundError(user_id)
        self._log.info("user_deleted", actor_id=str(actor.id), user_id=str(user_id))

    async def get_profile(self, actor: ActorIdentity) -> User:
        return await self._load(actor.id)

    async def update_profile(
        self,
        actor: ActorIdentity,
        username: str | None = None,
        email: str | None = None,
    ) -> User:
        """Change the actor's own username and/or email.

        Empty values leave the field unchanged.

        Raises:
            UserAlreadyExistsError: Another account holds the value.
            UserNotFoundError: The actor's account no longer exists.
        """
        current = await self._load(actor.id)
        updated = current.with_profile(username=username, email=email)

        new_username = updated.username if updated.username != current.username else None
        new_email = updated.email if updated.email != current.email else None
        if new_username is None and new_email is None:
            return current

        changes: dict[str, str] = {}
        if new_username is not None:
            changes["username"] = new_username
        if new_email is not None:
            changes["email"] = new_email

        await self._ensure_unique(
            username=new_username, email=new_email, exclude_id=actor.id
        )
        try:
            record = await self._store.update_by_id(Collection.USERS, actor.id, changes)
        except DuplicateKeyError:
            raise UserAlreadyExistsError(
                username=updated.username, email=updated.email
            ) from None
        if record is None:
            raise UserNotFoundError(actor.id)

        self._log.info("profile_updated", user_id=str(actor.id), fields=sorted(changes))
        return User.from_record(record)

    async def seed_users(self) -> int:
        """Create the demo accounts when the user collection is empty.

        Returns:
            Number of accounts created; 0 when users already exist.
        """
        if await self._store.count_where(Collection.USERS) > 0:
            self._log.info("seed_skipped")
            return 0

        password_hash = await self._credentials.hash_password(self._seed_password)
        created = 0
        for username, email, role in SEED_ACCOUNTS:
            user = User(
                username=username, email=email, password_hash=password_hash, role=role
            )
            try:
                await self._store.insert(Collection.USERS, user.to_record())
            except DuplicateKeyError:
                # A concurrent seed got there first
                continue
            created += 1

        self._log.info("users_seeded", count=created)
        return created

    async def _load(self, user_id: UUID) -> User:
        record = await self._store.find_one(Collection.USERS, FieldEquals("id", user_id))
        if record is None:
            raise UserNotFoundError(user_id)
        return User.from_record(record)

    async def _create_user(
        self, username: str, email: str, password: str, role: Role
    ) -> User:
        username = normalize_username(username or "")
        email = normalize_email(email or "")
        if not username or not email or not password:
            raise InvalidInputError("Username, email, and password are required")

        await self._ensure_unique(username=username, email=email)

        user = User(
            username=username,
            email=email,
            password_hash=await self._credentials.hash_password(password),
            role=role,
        )
        try:
            await self._store.insert(Collection.USERS, user.to_record())
        except DuplicateKeyError:
            raise UserAlreadyExistsError(username=username, email=email) from None
        return user

    async def _ensure_unique(
        self,
        username: str | None = None,
        email: str | None = None,
        exclude_id: UUID | None = None,
    ) -> None:
        clauses: list[FilterExpression] = []
        if username:
            clauses.append(FieldEquals("username", username))
        if email:
            clauses.append(FieldEquals("email", email))
        if not clauses:
            return

        records = await self._store.find(Collection.USERS, AnyOf(*clauses))
        if any(record["id"] != exclude_id for record in records):
            raise UserAlreadyExistsError(username=username, email=email)
