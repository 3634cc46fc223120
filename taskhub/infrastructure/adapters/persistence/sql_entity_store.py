"""SQLAlchemy async implementation of EntityStoreProtocol.

Works against PostgreSQL (asyncpg) in production and SQLite (aiosqlite)
in integration tests.

FilterExpression trees compile to SQL clauses:
    MatchAll        -> TRUE
    FieldEquals     -> col = value   (col IS NULL for None)
    FieldIn         -> col IN (...)  (FALSE when empty)
    FieldContains   -> col ILIKE '%term%' with LIKE wildcards escaped
    AllOf / AnyOf   -> AND / OR, nesting preserved

Every write runs in its own transaction. An IntegrityError from a
unique constraint is raised as DuplicateKeyError.
"""

from __future__ import annotations

from uuid import UUID

import structlog
from sqlalchemy import (
    ColumnElement,
    Table,
    and_,
    delete,
    false,
    func,
    insert,
    literal,
    or_,
    select,
    true,
    update,
)
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from taskhub.application.ports.entity_store import (
    UNIQUE_FIELDS,
    Collection,
    Record,
)
from taskhub.domain.errors import DuplicateKeyError
from taskhub.domain.value_objects.filter_expression import (
    MATCH_ALL,
    AllOf,
    AnyOf,
    FieldContains,
    FieldEquals,
    FieldIn,
    FilterExpression,
    MatchAll,
    SortSpec,
)
from taskhub.infrastructure.adapters.persistence.tables import TABLES, metadata

logger = structlog.get_logger(__name__)

LIKE_ESCAPE = "\\"


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches literally."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def compile_filter(table: Table, expression: FilterExpression) -> ColumnElement[bool]:
    """Translate a FilterExpression into a WHERE clause for ``table``.

    Raises:
        ValueError: Unknown node type or a field the table does not have.
    """
    if isinstance(expression, MatchAll):
        return true()
    if isinstance(expression, AllOf):
        if not expression.clauses:
            return true()
        return and_(*(compile_filter(table, c) for c in expression.clauses))
    if isinstance(expression, AnyOf):
        if not expression.clauses:
            return false()
        return or_(*(compile_filter(table, c) for c in expression.clauses))

    if isinstance(expression, (FieldEquals, FieldIn, FieldContains)):
        if expression.field not in table.c:
            raise ValueError(f"Unknown field {expression.field!r} on {table.name}")
        column = table.c[expression.field]

        if isinstance(expression, FieldEquals):
            if expression.value is None:
                return column.is_(None)
            return column == expression.value
        if isinstance(expression, FieldIn):
            if not expression.values:
                return false()
            return column.in_(list(expression.values))
        return column.ilike(f"%{escape_like(expression.term)}%", escape=LIKE_ESCAPE)

    raise ValueError(f"Unsupported filter expression: {type(expression).__name__}")


class SqlEntityStore:
    """Entity store over a SQLAlchemy async engine.

    Example:
        >>> engine = create_async_engine("sqlite+aiosqlite:///taskhub.db")
        >>> store = SqlEntityStore(engine)
        >>> await store.initialize()
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine
        self._session_factory = async_sessionmaker(
            bind=engine, class_=AsyncSession, expire_on_commit=False
        )
        self._log = logger.bind(component="sql_entity_store")

    async def initialize(self) -> None:
        """Create missing tables and indexes."""
        async with self._engine.begin() as conn:
            await conn.run_sync(metadata.create_all)
        self._log.info("schema_ready", tables=sorted(metadata.tables))

    async def close(self) -> None:
        await self._engine.dispose()
        self._log.info("engine_disposed")

    async def find(
        self,
        collection: Collection,
        filter: FilterExpression = MATCH_ALL,
        sort: SortSpec | None = None,
    ) -> list[Record]:
        table = TABLES[collection]
        stmt = select(table).where(compile_filter(table, filter))
        if sort is not None:
            column = table.c[sort.field]
            stmt = stmt.order_by(column.desc() if sort.descending else column.asc())

        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [dict(row) for row in result.mappings()]

    async def find_one(
        self, collection: Collection, filter: FilterExpression
    ) -> Record | None:
        table = TABLES[collection]
        stmt = select(table).where(compile_filter(table, filter)).limit(1)
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            row = result.mappings().first()
            return dict(row) if row is not None else None

    async def insert(self, collection: Collection, record: Record) -> Record:
        table = TABLES[collection]
        async with self._session_factory() as session:
            try:
                await session.execute(insert(table).values(**record))
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                raise self._duplicate(collection, e) from e
        return dict(record)

    async def update_by_id(
        self,
        collection: Collection,
        record_id: UUID,
        changes: Record,
        set_once: Record | None = None,
    ) -> Record | None:
        table = TABLES[collection]
        values: dict[str, object] = dict(changes)
        for name, value in (set_once or {}).items():
            column = table.c[name]
            values[name] = func.coalesce(column, literal(value, type_=column.type))
        async with self._session_factory() as session:
            try:
                result = await session.execute(
                    update(table).where(table.c.id == record_id).values(**values)
                )
                if result.rowcount == 0:
                    await session.rollback()
                    return None
                row = (
                    await session.execute(select(table).where(table.c.id == record_id))
                ).mappings().one()
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                raise self._duplicate(collection, e) from e
        return dict(row)

    async def delete_by_id(self, collection: Collection, record_id: UUID) -> bool:
        table = TABLES[collection]
        async with self._session_factory() as session:
            result = await session.execute(delete(table).where(table.c.id == record_id))
            await session.commit()
            return result.rowcount > 0

    async def count_where(
        self, collection: Collection, filter: FilterExpression = MATCH_ALL
    ) -> int:
        table = TABLES[collection]
        stmt = select(func.count()).select_from(table).where(compile_filter(table, filter))
        async with self._session_factory() as session:
            return int((await session.execute(stmt)).scalar_one())

    def _duplicate(self, collection: Collection, error: IntegrityError) -> DuplicateKeyError:
        detail = str(error.orig)
        fields = tuple(name for name in UNIQUE_FIELDS[collection] if name in detail)
        self._log.info(
            "unique_constraint_violation", collection=collection.value, fields=fields
        )
        return DuplicateKeyError(collection.value, fields)
