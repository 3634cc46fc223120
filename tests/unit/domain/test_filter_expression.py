"""Unit tests for filter expressions."""

from uuid import uuid4

import pytest

from taskhub.domain.value_objects.filter_expression import (
    MATCH_ALL,
    AllOf,
    AnyOf,
    FieldContains,
    FieldEquals,
    FieldIn,
    MatchAll,
    conjoin,
)


class TestLeafNodes:
    def test_match_all(self) -> None:
        assert MATCH_ALL.matches({})
        assert MATCH_ALL.matches({"status": "DONE"})

    def test_field_equals(self) -> None:
        expr = FieldEquals("status", "DONE")
        assert expr.matches({"status": "DONE"})
        assert not expr.matches({"status": "TO_DO"})
        assert not expr.matches({})

    def test_field_equals_none_matches_missing_or_null(self) -> None:
        expr = FieldEquals("assigned_to", None)
        assert expr.matches({"assigned_to": None})
        assert expr.matches({})
        assert not expr.matches({"assigned_to": uuid4()})

    def test_field_in(self) -> None:
        a, b, c = uuid4(), uuid4(), uuid4()
        expr = FieldIn.of("id", [a, b])
        assert expr.matches({"id": a})
        assert not expr.matches({"id": c})

    def test_field_in_empty_matches_nothing(self) -> None:
        assert not FieldIn.of("id", []).matches({"id": uuid4()})

    def test_field_contains_is_case_insensitive(self) -> None:
        expr = FieldContains("heading", "REPORT")
        assert expr.matches({"heading": "Quarterly report draft"})
        assert not expr.matches({"heading": "Budget"})

    @pytest.mark.parametrize("term", [".*", "a+b", "50%", "snake_case", "(x)"])
    def test_field_contains_treats_term_literally(self, term: str) -> None:
        expr = FieldContains("heading", term)
        assert expr.matches({"heading": f"prefix {term} suffix"})
        assert not expr.matches({"heading": "prefix plain suffix"})

    def test_field_contains_non_text_is_false(self) -> None:
        expr = FieldContains("description", "x")
        assert not expr.matches({"description": None})
        assert not expr.matches({})


class TestCompositeNodes:
    def test_all_of(self) -> None:
        expr = AllOf(FieldEquals("a", 1), FieldEquals("b", 2))
        assert expr.matches({"a": 1, "b": 2})
        assert not expr.matches({"a": 1, "b": 3})

    def test_any_of(self) -> None:
        expr = AnyOf(FieldEquals("a", 1), FieldEquals("b", 2))
        assert expr.matches({"a": 0, "b": 2})
        assert not expr.matches({"a": 0, "b": 0})

    def test_empty_groups(self) -> None:
        assert AllOf().matches({})
        assert not AnyOf().matches({})

    def test_nested_groups_are_preserved(self) -> None:
        scope = AnyOf(FieldEquals("created_by", 1), FieldEquals("assigned_to", 1))
        search = AnyOf(FieldContains("heading", "x"), FieldContains("description", "x"))
        expr = AllOf(scope, search)

        assert expr.clauses == (scope, search)
        # In scope but no text match
        assert not expr.matches({"created_by": 1, "heading": "y", "description": "y"})
        # Text match but out of scope
        assert not expr.matches({"created_by": 2, "heading": "x", "description": ""})
        assert expr.matches({"assigned_to": 1, "heading": "", "description": "xx"})

    def test_groups_are_hashable_values(self) -> None:
        assert AllOf(FieldEquals("a", 1)) == AllOf(FieldEquals("a", 1))
        assert hash(AnyOf(FieldEquals("a", 1))) == hash(AnyOf(FieldEquals("a", 1)))


class TestConjoin:
    def test_only_match_all_reduces_to_match_all(self) -> None:
        assert isinstance(conjoin([MATCH_ALL, MatchAll()]), MatchAll)
        assert isinstance(conjoin([]), MatchAll)

    def test_single_clause_is_unwrapped(self) -> None:
        clause = FieldEquals("status", "DONE")
        assert conjoin([MATCH_ALL, clause]) is clause

    def test_keeps_or_groups_nested(self) -> None:
        group = AnyOf(FieldEquals("a", 1), FieldEquals("b", 1))
        clause = FieldEquals("status", "DONE")

        result = conjoin([group, clause])

        assert result == AllOf(group, clause)
