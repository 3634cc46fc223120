"""Unit tests for compiling filter expressions to SQL."""

from uuid import uuid4

import pytest
from sqlalchemy.dialects import postgresql

from taskhub.domain.value_objects.filter_expression import (
    MATCH_ALL,
    AllOf,
    AnyOf,
    FieldContains,
    FieldEquals,
    FieldIn,
)
from taskhub.infrastructure.adapters.persistence import compile_filter, escape_like
from taskhub.infrastructure.adapters.persistence.tables import tasks


def _sql(expression) -> str:
    clause = compile_filter(tasks, expression)
    return str(clause.compile(dialect=postgresql.dialect()))


@pytest.mark.parametrize(
    ("term", "expected"),
    [("50%", "50\\%"), ("snake_case", "snake\\_case"), ("a\\b", "a\\\\b"), ("plain", "plain")],
)
def test_escape_like(term, expected):
    assert escape_like(term) == expected


def test_match_all_is_true():
    assert _sql(MATCH_ALL) == "true"


def test_equals_none_is_null_check():
    assert _sql(FieldEquals("assigned_to", None)) == "tasks.assigned_to IS NULL"


def test_empty_in_is_false():
    assert _sql(FieldIn.of("id", [])) == "false"


def test_contains_uses_ilike_with_escape():
    sql = _sql(FieldContains("heading", "50%"))
    assert "ILIKE" in sql
    assert "ESCAPE" in sql


def test_nested_groups_keep_parentheses():
    uid = uuid4()
    expr = AllOf(
        AnyOf(FieldEquals("created_by", uid), FieldEquals("assigned_to", uid)),
        AnyOf(FieldContains("heading", "x"), FieldContains("description", "x")),
    )

    sql = _sql(expr)

    assert sql.count("(") >= 2
    assert " AND " in sql
    assert sql.index(" OR ") < sql.index(" AND ")


def test_unknown_field_is_rejected():
    with pytest.raises(ValueError, match="Unknown field"):
        compile_filter(tasks, FieldEquals("nope", 1))
