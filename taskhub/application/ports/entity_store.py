"""Entity store protocol.

This module defines the generic persistence port the services talk to.
Follows hexagonal architecture with port/adapter pattern: the in-memory
stub and the SQLAlchemy store both implement it.

Records are plain dictionaries keyed by field name; domain models convert
themselves with ``to_record`` / ``from_record``. Filters are
FilterExpression trees, so the same query runs against any adapter.

Unique indexes:
    users.username, users.email, projects.title

A write that collides with a unique index MUST raise DuplicateKeyError.
That is the storage-level backstop behind the services' pre-write
uniqueness checks.
"""

from __future__ import annotations

from abc import abstractmethod
from enum import Enum
from typing import Any, Protocol, runtime_checkable
from uuid import UUID

from taskhub.domain.value_objects.filter_expression import (
    MATCH_ALL,
    FilterExpression,
    SortSpec,
)

Record = dict[str, Any]


class Collection(Enum):
    """Collections held by the entity store."""

    USERS = "users"
    PROJECTS = "projects"
    TASKS = "tasks"


# Unique fields per collection, enforced by every store implementation
UNIQUE_FIELDS: dict[Collection, tuple[str, ...]] = {
    Collection.USERS: ("username", "email"),
    Collection.PROJECTS: ("title",),
    Collection.TASKS: (),
}


@runtime_checkable
class EntityStoreProtocol(Protocol):
    """Protocol for entity persistence.

    Implementations must:
    1. Enforce UNIQUE_FIELDS and raise DuplicateKeyError on collision
    2. Apply each insert/update atomically (all fields or none)
    3. Return copies, never live internal state
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Prepare the backing store (create tables, indexes)."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release connections held by the store."""
        ...

    @abstractmethod
    async def find(
        self,
        collection: Collection,
        filter: FilterExpression = MATCH_ALL,
        sort: SortSpec | None = None,
    ) -> list[Record]:
        """Return all records matching ``filter``, optionally ordered.

        Args:
            collection: Collection to query.
            filter: Predicate records must satisfy.
            sort: Optional single-field ordering.

        Returns:
            Matching records (possibly empty).
        """
        ...

    @abstractmethod
    async def find_one(
        self, collection: Collection, filter: FilterExpression
    ) -> Record | None:
        """Return one record matching ``filter`` or None."""
        ...

    @abstractmethod
    async def insert(self, collection: Collection, record: Record) -> Record:
        """Insert a record.

        Returns:
            The stored record.

        Raises:
            DuplicateKeyError: A unique field collides with an existing record.
        """
        ...

    @abstractmethod
    async def update_by_id(
        self,
        collection: Collection,
        record_id: UUID,
        changes: Record,
        set_once: Record | None = None,
    ) -> Record | None:
        """Apply ``changes`` to the record with ``record_id``.

        Fields in ``set_once`` are written only where the stored value is
        null; a field that is already set keeps its value. Both maps are
        applied in the same atomic write.

        Returns:
            The updated record, or None if the id does not resolve.

        Raises:
            DuplicateKeyError: A changed unique field collides.
        """
        ...

    @abstractmethod
    async def delete_by_id(self, collection: Collection, record_id: UUID) -> bool:
        """Delete a record. Returns True if a record was removed."""
        ...

    @abstractmethod
    async def count_where(
        self, collection: Collection, filter: FilterExpression = MATCH_ALL
    ) -> int:
        """Count records matching ``filter``."""
        ...
