"""Unit tests for visibility scopes."""

from uuid import uuid4

from taskhub.domain.models.actor import Role
from taskhub.domain.models.task import Task
from taskhub.domain.value_objects.auth_scope import (
    OwnedOrAssigned,
    Unrestricted,
    scope_for,
)
from taskhub.domain.value_objects.filter_expression import (
    AnyOf,
    FieldEquals,
    MatchAll,
)
from tests.helpers import make_actor


def test_admin_gets_unrestricted_scope() -> None:
    scope = scope_for(make_actor(Role.ADMIN))

    assert isinstance(scope, Unrestricted)
    assert isinstance(scope.to_filter(), MatchAll)
    assert scope.permits(Task(heading="x", created_by=uuid4()))


def test_user_gets_owned_or_assigned_scope() -> None:
    user = make_actor(Role.USER)
    scope = scope_for(user)

    assert scope == OwnedOrAssigned(actor_id=user.id)
    assert scope.to_filter() == AnyOf(
        FieldEquals("created_by", user.id),
        FieldEquals("assigned_to", user.id),
    )


def test_owned_or_assigned_permits_creator_and_assignee_only() -> None:
    user = make_actor()
    scope = scope_for(user)

    created = Task(heading="mine", created_by=user.id)
    assigned = Task(heading="for me", created_by=uuid4(), assigned_to=user.id)
    unrelated = Task(heading="other", created_by=uuid4(), assigned_to=uuid4())

    assert scope.permits(created)
    assert scope.permits(assigned)
    assert not scope.permits(unrelated)


def test_filter_and_permits_agree() -> None:
    user = make_actor()
    scope = scope_for(user)
    tasks = [
        Task(heading="a", created_by=user.id),
        Task(heading="b", created_by=uuid4(), assigned_to=user.id),
        Task(heading="c", created_by=uuid4()),
    ]

    for task in tasks:
        assert scope.to_filter().matches(task.to_record()) == scope.permits(task)
