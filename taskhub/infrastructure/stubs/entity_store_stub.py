"""In-memory stub for EntityStoreProtocol.

Used for local development (no DATABASE_URL) and in tests. It simulates
the database behaviour the services rely on:
- Unique index enforcement per UNIQUE_FIELDS (DuplicateKeyError)
- Single-step insert/update (all fields or none)
- FilterExpression evaluation and single-field ordering

Each write checks the unique indexes and stores the record without
awaiting in between, so two coroutines can never both pass the check for
the same value.
"""

from __future__ import annotations

from collections.abc import Callable
from copy import deepcopy
from typing import Any
from uuid import UUID

from taskhub.application.ports.entity_store import (
    UNIQUE_FIELDS,
    Collection,
    Record,
)
from taskhub.domain.errors import DuplicateKeyError
from taskhub.domain.value_objects.filter_expression import (
    MATCH_ALL,
    FilterExpression,
    SortSpec,
)


def _sort_key(field: str) -> Callable[[Record], tuple[bool, Any]]:
    def key(record: Record) -> tuple[bool, Any]:
        value = record.get(field)
        return (value is None, value)

    return key


class EntityStoreStub:
    """In-memory implementation of EntityStoreProtocol.

    Records are stored as dict copies keyed by id per collection, and
    every read returns copies.
    """

    def __init__(self) -> None:
        self._collections: dict[Collection, dict[UUID, Record]] = {
            collection: {} for collection in Collection
        }
        self.initialized = False
        self.closed = False

    async def initialize(self) -> None:
        self.initialized = True

    async def close(self) -> None:
        self.closed = True

    async def find(
        self,
        collection: Collection,
        filter: FilterExpression = MATCH_ALL,
        sort: SortSpec | None = None,
    ) -> list[Record]:
        records = [
            deepcopy(record)
            for record in self._collections[collection].values()
            if filter.matches(record)
        ]
        if sort is not None:
            records.sort(key=_sort_key(sort.field), reverse=sort.descending)
        return records

    async def find_one(
        self, collection: Collection, filter: FilterExpression
    ) -> Record | None:
        for record in self._collections[collection].values():
            if filter.matches(record):
                return deepcopy(record)
        return None

    async def insert(self, collection: Collection, record: Record) -> Record:
        self._check_unique(collection, record, exclude_id=None)
        stored = deepcopy(record)
        self._collections[collection][stored["id"]] = stored
        return deepcopy(stored)

    async def update_by_id(
        self,
        collection: Collection,
        record_id: UUID,
        changes: Record,
        set_once: Record | None = None,
    ) -> Record | None:
        current = self._collections[collection].get(record_id)
        if current is None:
            return None
        merged = {**current, **deepcopy(changes), "id": record_id}
        for name, value in (set_once or {}).items():
            if current.get(name) is None:
                merged[name] = deepcopy(value)
        self._check_unique(collection, merged, exclude_id=record_id)
        self._collections[collection][record_id] = merged
        return deepcopy(merged)

    async def delete_by_id(self, collection: Collection, record_id: UUID) -> bool:
        return self._collections[collection].pop(record_id, None) is not None

    async def count_where(
        self, collection: Collection, filter: FilterExpression = MATCH_ALL
    ) -> int:
        return sum(
            1 for record in self._collections[collection].values() if filter.matches(record)
        )

    def clear(self) -> None:
        """Drop all records (test helper)."""
        for records in self._collections.values():
            records.clear()

    def _check_unique(
        self, collection: Collection, record: Record, exclude_id: UUID | None
    ) -> None:
        fields = UNIQUE_FIELDS[collection]
        for existing_id, existing in self._collections[collection].items():
            if existing_id == exclude_id:
                continue
            clashes = tuple(
                name
                for name in fields
                if record.get(name) is not None and existing.get(name) == record.get(name)
            )
            if clashes:
                raise DuplicateKeyError(collection.value, clashes)
