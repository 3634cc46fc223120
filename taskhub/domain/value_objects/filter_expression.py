"""Composable filter expressions over entity records.

A FilterExpression is an immutable predicate tree. The same tree is
evaluated in memory (``matches``) by the stub store and compiled into a
SQL clause by the SQLAlchemy store, so query composition happens once,
in the application layer, independent of the backing store.

Nodes:
    MatchAll: matches every record.
    FieldEquals: exact match (None matches a missing/null field).
    FieldIn: field value is one of a set of values.
    FieldContains: case-insensitive literal substring on a text field.
    AllOf: logical AND of child expressions.
    AnyOf: logical OR of child expressions.

Nesting is preserved: ``AllOf(AnyOf(a, b), AnyOf(c, d))`` stays two OR
groups joined by AND. Nothing here flattens or reorders children.

Usage:
    expr = AllOf(
        AnyOf(FieldEquals("created_by", uid), FieldEquals("assigned_to", uid)),
        FieldEquals("status", "DONE"),
    )
    expr.matches(record)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any


class FilterExpression(ABC):
    """Base class for filter expression nodes."""

    @abstractmethod
    def matches(self, record: Mapping[str, Any]) -> bool:
        """Evaluate this expression against a record.

        Args:
            record: Field name to value mapping.

        Returns:
            True if the record satisfies the expression.
        """
        ...


@dataclass(frozen=True)
class MatchAll(FilterExpression):
    """Matches every record."""

    def matches(self, record: Mapping[str, Any]) -> bool:
        return True


MATCH_ALL = MatchAll()


@dataclass(frozen=True)
class FieldEquals(FilterExpression):
    """Exact match on a single field."""

    field: str
    value: Any

    def matches(self, record: Mapping[str, Any]) -> bool:
        return record.get(self.field) == self.value


@dataclass(frozen=True)
class FieldIn(FilterExpression):
    """Field value is a member of ``values``."""

    field: str
    values: frozenset[Any]

    @classmethod
    def of(cls, field: str, values: Iterable[Any]) -> FieldIn:
        return cls(field=field, values=frozenset(values))

    def matches(self, record: Mapping[str, Any]) -> bool:
        return record.get(self.field) in self.values


@dataclass(frozen=True)
class FieldContains(FilterExpression):
    """Case-insensitive substring match on a text field.

    The term is literal text. Characters that are special in regular
    expressions or SQL LIKE patterns carry no meaning here.
    """

    field: str
    term: str

    def matches(self, record: Mapping[str, Any]) -> bool:
        value = record.get(self.field)
        if not isinstance(value, str):
            return False
        return self.term.casefold() in value.casefold()


@dataclass(frozen=True)
class AllOf(FilterExpression):
    """Logical AND of child expressions. An empty AllOf matches everything."""

    clauses: tuple[FilterExpression, ...]

    def __init__(self, *clauses: FilterExpression) -> None:
        object.__setattr__(self, "clauses", tuple(clauses))

    def matches(self, record: Mapping[str, Any]) -> bool:
        return all(clause.matches(record) for clause in self.clauses)


@dataclass(frozen=True)
class AnyOf(FilterExpression):
    """Logical OR of child expressions. An empty AnyOf matches nothing."""

    clauses: tuple[FilterExpression, ...]

    def __init__(self, *clauses: FilterExpression) -> None:
        object.__setattr__(self, "clauses", tuple(clauses))

    def matches(self, record: Mapping[str, Any]) -> bool:
        return any(clause.matches(record) for clause in self.clauses)


def conjoin(clauses: Iterable[FilterExpression]) -> FilterExpression:
    """AND together ``clauses``, dropping MatchAll and unwrapping singletons.

    Only redundant MatchAll nodes are removed; child groups are kept
    intact, so an AnyOf passed in remains its own nested group.
    """
    kept = [clause for clause in clauses if not isinstance(clause, MatchAll)]
    if not kept:
        return MATCH_ALL
    if len(kept) == 1:
        return kept[0]
    return AllOf(*kept)


@dataclass(frozen=True)
class SortSpec:
    """Single-field ordering for find queries."""

    field: str
    descending: bool = False
