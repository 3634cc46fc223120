"""Unit tests for the authorization policy."""

from uuid import uuid4

import pytest

from taskhub.application.services.authorization_policy import (
    can_mutate,
    can_view,
    ensure_admin,
    ensure_can_mutate,
    ensure_can_view,
    is_admin,
    resolve_assignee,
)
from taskhub.domain.errors import AdminRequiredError, TaskAccessDeniedError
from taskhub.domain.models.actor import Role
from taskhub.domain.models.task import Task
from tests.helpers import make_actor


@pytest.fixture
def owner():
    return make_actor()


@pytest.fixture
def assignee():
    return make_actor()


@pytest.fixture
def outsider():
    return make_actor()


@pytest.fixture
def task(owner, assignee) -> Task:
    return Task(heading="Review PR", created_by=owner.id, assigned_to=assignee.id)


class TestTaskAccess:
    def test_creator_and_assignee_may_view_and_mutate(self, task, owner, assignee):
        for actor in (owner, assignee):
            assert can_view(actor, task)
            assert can_mutate(actor, task)
            ensure_can_view(actor, task)
            ensure_can_mutate(actor, task)

    def test_admin_may_view_any_task(self, task):
        admin = make_actor(Role.ADMIN)
        assert can_view(admin, task)
        assert can_mutate(admin, task)

    def test_outsider_is_denied(self, task, outsider):
        assert not can_view(outsider, task)
        assert not can_mutate(outsider, task)

        with pytest.raises(TaskAccessDeniedError) as exc_info:
            ensure_can_view(outsider, task)
        assert exc_info.value.task_id == task.id
        assert exc_info.value.actor_id == outsider.id

        with pytest.raises(TaskAccessDeniedError):
            ensure_can_mutate(outsider, task)

    def test_view_and_mutate_agree(self, task, owner, outsider):
        admin = make_actor(Role.ADMIN)
        for actor in (owner, outsider, admin):
            assert can_view(actor, task) == can_mutate(actor, task)


class TestAdmin:
    def test_is_admin(self):
        assert is_admin(make_actor(Role.ADMIN))
        assert not is_admin(make_actor(Role.USER))

    def test_ensure_admin_rejects_users(self):
        ensure_admin(make_actor(Role.ADMIN))
        with pytest.raises(AdminRequiredError, match="Admin privileges required"):
            ensure_admin(make_actor(Role.USER))


class TestResolveAssignee:
    def test_admin_choice_is_kept(self):
        target = uuid4()
        assert resolve_assignee(make_actor(Role.ADMIN), target) == target

    def test_user_choice_is_dropped_silently(self):
        assert resolve_assignee(make_actor(Role.USER), uuid4()) is None

    def test_no_request_stays_unassigned(self):
        assert resolve_assignee(make_actor(Role.ADMIN), None) is None
        assert resolve_assignee(make_actor(Role.USER), None) is None
