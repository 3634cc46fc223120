"""Unit tests for TaskHub domain models."""

from datetime import datetime
from uuid import uuid4

import pytest

from taskhub.domain.models.actor import Role
from taskhub.domain.models.project import Project
from taskhub.domain.models.task import Task, TaskStatus
from taskhub.domain.models.user import User, normalize_email


class TestTask:
    def test_defaults(self) -> None:
        task = Task(heading="Plan sprint", created_by=uuid4())

        assert task.status is TaskStatus.TO_DO
        assert task.description == ""
        assert task.assigned_to is None
        assert task.in_progress_date is None
        assert task.completion_date is None
        assert task.created_date.tzinfo is not None

    def test_heading_required(self) -> None:
        with pytest.raises(ValueError, match="Heading is required"):
            Task(heading="", created_by=uuid4())

    def test_heading_length_limit(self) -> None:
        Task(heading="x" * 200, created_by=uuid4())
        with pytest.raises(ValueError, match="200"):
            Task(heading="x" * 201, created_by=uuid4())

    def test_description_length_limit(self) -> None:
        with pytest.raises(ValueError, match="1000"):
            Task(heading="ok", description="x" * 1001, created_by=uuid4())

    def test_involves(self) -> None:
        creator, assignee = uuid4(), uuid4()
        task = Task(heading="x", created_by=creator, assigned_to=assignee)

        assert task.involves(creator)
        assert task.involves(assignee)
        assert not task.involves(uuid4())

    def test_record_round_trip_restores_naive_timestamps_as_utc(self) -> None:
        task = Task(heading="x", created_by=uuid4(), status=TaskStatus.DONE)
        record = task.to_record()
        record["created_date"] = record["created_date"].replace(tzinfo=None)

        restored = Task.from_record(record)

        assert record["status"] == "DONE"
        assert restored.created_date == task.created_date
        assert restored.status is TaskStatus.DONE


class TestUser:
    def test_record_stores_role_value(self) -> None:
        user = User(username="ann", email="ann@example.com", password_hash="h")
        assert user.to_record()["role"] == "user"
        assert User.from_record(user.to_record()) == user

    def test_unknown_role_in_record_is_rejected(self) -> None:
        record = User(username="a", email="a@x.io", password_hash="h").to_record()
        record["role"] = "superuser"
        with pytest.raises(ValueError, match="Unknown role"):
            User.from_record(record)

    def test_with_profile_normalizes(self) -> None:
        user = User(username="ann", email="ann@example.com", password_hash="h")
        updated = user.with_profile(username="  annie ", email=" Annie@Example.COM ")

        assert updated.username == "annie"
        assert updated.email == "annie@example.com"
        assert updated.id == user.id

    def test_with_profile_ignores_empty_values(self) -> None:
        user = User(username="ann", email="ann@example.com", password_hash="h")
        assert user.with_profile(username="", email=None) == user

    def test_as_actor(self) -> None:
        user = User(username="root", email="r@x.io", password_hash="h", role=Role.ADMIN)
        actor = user.as_actor()
        assert actor.id == user.id
        assert actor.is_admin

    def test_normalize_email(self) -> None:
        assert normalize_email("  Bob@Example.org ") == "bob@example.org"


class TestProject:
    def test_title_required(self) -> None:
        with pytest.raises(ValueError):
            Project(title="")

    def test_with_details_trims_and_touches_updated_at(self) -> None:
        project = Project(title="Alpha", created_at=datetime(2026, 1, 1).astimezone())
        updated = project.with_details("  Beta  ", "  notes ")

        assert updated.title == "Beta"
        assert updated.description == "notes"
        assert updated.updated_at >= project.updated_at
        assert updated.created_at == project.created_at
