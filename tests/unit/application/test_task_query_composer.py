"""Unit tests for task listing filter composition.

Key Test Scenarios:
1. Admins without filters get MatchAll
2. Users are always confined to created_by OR assigned_to
3. Search is a separate OR group ANDed with the scope
4. Unknown status is rejected before any query runs
"""

from uuid import uuid4

import pytest

from taskhub.application.services.task_query_composer import (
    TASK_SORT,
    TaskQueryParams,
    build_task_filter,
    search_clause,
)
from taskhub.domain.errors import InvalidStatusError
from taskhub.domain.models.actor import Role
from taskhub.domain.value_objects.filter_expression import (
    AllOf,
    AnyOf,
    FieldContains,
    FieldEquals,
    MatchAll,
)
from tests.helpers import make_actor


def _scope(actor_id):
    return AnyOf(FieldEquals("created_by", actor_id), FieldEquals("assigned_to", actor_id))


def test_sort_is_newest_first():
    assert TASK_SORT.field == "created_date"
    assert TASK_SORT.descending


def test_admin_without_filters_matches_all():
    assert isinstance(build_task_filter(make_actor(Role.ADMIN)), MatchAll)


def test_user_without_filters_gets_scope_only():
    user = make_actor()
    assert build_task_filter(user) == _scope(user.id)


def test_empty_strings_count_as_absent():
    user = make_actor()
    params = TaskQueryParams(status="", project_label="", search="")
    assert build_task_filter(user, params) == _scope(user.id)


def test_admin_with_status_filter():
    expr = build_task_filter(make_actor(Role.ADMIN), TaskQueryParams(status="DONE"))
    assert expr == FieldEquals("status", "DONE")


def test_all_filters_in_order():
    user = make_actor()
    project_id = uuid4()
    params = TaskQueryParams(
        status="IN_PROGRESS",
        project_label="Ops",
        project_id=project_id,
        search="report",
    )

    expr = build_task_filter(user, params)

    assert expr == AllOf(
        _scope(user.id),
        FieldEquals("status", "IN_PROGRESS"),
        FieldEquals("project_label", "Ops"),
        FieldEquals("project_id", project_id),
        search_clause("report"),
    )


def test_search_never_widens_user_scope():
    user = make_actor()
    expr = build_task_filter(user, TaskQueryParams(search="report"))

    foreign = {
        "created_by": uuid4(),
        "assigned_to": None,
        "heading": "Quarterly report",
        "description": "",
    }
    own = {**foreign, "created_by": user.id}

    assert not expr.matches(foreign)
    assert expr.matches(own)


def test_search_clause_covers_heading_and_description():
    assert search_clause("x") == AnyOf(
        FieldContains("heading", "x"), FieldContains("description", "x")
    )


@pytest.mark.parametrize("status", ["done", "CLOSED", "TODO"])
def test_invalid_status_is_rejected(status):
    with pytest.raises(InvalidStatusError):
        build_task_filter(make_actor(), TaskQueryParams(status=status))
