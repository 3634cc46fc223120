"""Visibility scope derived from an actor's role.

Every task listing, statistic and task-user lookup starts from the
actor's AuthScope instead of branching on the role inline:

    Unrestricted          -> admins, matches every task
    OwnedOrAssigned(id)   -> users, matches tasks they created or are assigned to

The scope turns itself into a FilterExpression for queries and answers
``permits(task)`` for single-entity checks, so list and get paths apply
exactly the same rule.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from uuid import UUID

from taskhub.domain.models.actor import ActorIdentity
from taskhub.domain.models.task import Task
from taskhub.domain.value_objects.filter_expression import (
    MATCH_ALL,
    AnyOf,
    FieldEquals,
    FilterExpression,
)


class AuthScope(ABC):
    """Base class for visibility scopes."""

    @abstractmethod
    def to_filter(self) -> FilterExpression:
        """Return the task predicate for this scope."""
        ...

    @abstractmethod
    def permits(self, task: Task) -> bool:
        """Return True when the task is inside this scope."""
        ...


@dataclass(frozen=True)
class Unrestricted(AuthScope):
    """Scope of an admin actor."""

    def to_filter(self) -> FilterExpression:
        return MATCH_ALL

    def permits(self, task: Task) -> bool:
        return True


@dataclass(frozen=True)
class OwnedOrAssigned(AuthScope):
    """Scope of a regular user: tasks they created or are assigned to."""

    actor_id: UUID

    def to_filter(self) -> FilterExpression:
        return AnyOf(
            FieldEquals("created_by", self.actor_id),
            FieldEquals("assigned_to", self.actor_id),
        )

    def permits(self, task: Task) -> bool:
        return task.involves(self.actor_id)


def scope_for(actor: ActorIdentity) -> AuthScope:
    """Derive the visibility scope for an actor."""
    if actor.is_admin:
        return Unrestricted()
    return OwnedOrAssigned(actor_id=actor.id)
