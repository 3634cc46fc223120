"""Fixtures for API route tests.

The app is wired to the in-memory stubs through the dependency setters,
and the demo accounts are seeded through the public endpoint.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from taskhub.api.dependencies import (
    reset_dependencies,
    set_config,
    set_entity_store,
    set_file_storage,
    set_password_hasher,
)
from taskhub.api.main import create_app
from taskhub.config import TEST_APP_CONFIG
from taskhub.infrastructure.adapters.security import BcryptPasswordHasher
from taskhub.infrastructure.stubs import EntityStoreStub, FileStorageStub
from tests.helpers import login


@pytest.fixture
def app(store: EntityStoreStub, file_storage: FileStorageStub) -> FastAPI:
    reset_dependencies()
    set_config(TEST_APP_CONFIG)
    set_entity_store(store)
    set_file_storage(file_storage)
    set_password_hasher(BcryptPasswordHasher(rounds=4))

    yield create_app()

    reset_dependencies()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture
def seeded(client: TestClient) -> TestClient:
    response = client.post("/api/auth/seed")
    assert response.status_code == 200
    return client


@pytest.fixture
def admin_headers(seeded: TestClient) -> dict[str, str]:
    return login(seeded, "admin")


@pytest.fixture
def user1_headers(seeded: TestClient) -> dict[str, str]:
    return login(seeded, "user1")


@pytest.fixture
def user2_headers(seeded: TestClient) -> dict[str, str]:
    return login(seeded, "user2")
