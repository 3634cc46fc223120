"""
Pytest configuration and shared fixtures for TaskHub tests.

Testing Standards:
- Async tests run under pytest-asyncio (auto mode enabled in pyproject.toml)
- Use AsyncMock for async port doubles
- Services are exercised against the in-memory stubs
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/
"""

from datetime import timedelta

import pytest

from taskhub.application.services.credential_service import CredentialService
from taskhub.application.services.project_service import ProjectService
from taskhub.application.services.task_service import TaskService
from taskhub.application.services.user_service import UserService
from taskhub.domain.models.actor import ActorIdentity, Role
from taskhub.domain.models.user import User
from taskhub.infrastructure.adapters.security import BcryptPasswordHasher, JwtTokenCodec
from taskhub.infrastructure.stubs import EntityStoreStub, FileStorageStub
from tests.helpers import TEST_JWT_SECRET, add_user


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from taskhub import __version__

    return __version__


@pytest.fixture
def store() -> EntityStoreStub:
    return EntityStoreStub()


@pytest.fixture
def file_storage() -> FileStorageStub:
    return FileStorageStub()


@pytest.fixture
def hasher() -> BcryptPasswordHasher:
    """Lowest bcrypt cost so tests stay fast."""
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def token_codec() -> JwtTokenCodec:
    return JwtTokenCodec(secret=TEST_JWT_SECRET, ttl=timedelta(hours=24))


@pytest.fixture
def credential_service(
    store: EntityStoreStub, hasher: BcryptPasswordHasher, token_codec: JwtTokenCodec
) -> CredentialService:
    return CredentialService(store, hasher, token_codec)


@pytest.fixture
def project_service(store: EntityStoreStub) -> ProjectService:
    return ProjectService(store)


@pytest.fixture
def task_service(store: EntityStoreStub, file_storage: FileStorageStub) -> TaskService:
    return TaskService(store, file_storage)


@pytest.fixture
def user_service(
    store: EntityStoreStub,
    credential_service: CredentialService,
    task_service: TaskService,
) -> UserService:
    return UserService(store, credential_service, task_service)


@pytest.fixture
async def admin_user(store: EntityStoreStub) -> User:
    return await add_user(store, "admin", Role.ADMIN)


@pytest.fixture
async def alice_user(store: EntityStoreStub) -> User:
    return await add_user(store, "alice")


@pytest.fixture
async def bob_user(store: EntityStoreStub) -> User:
    return await add_user(store, "bob")


@pytest.fixture
def admin(admin_user: User) -> ActorIdentity:
    return admin_user.as_actor()


@pytest.fixture
def alice(alice_user: User) -> ActorIdentity:
    return alice_user.as_actor()


@pytest.fixture
def bob(bob_user: User) -> ActorIdentity:
    return bob_user.as_actor()

