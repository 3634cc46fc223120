"""
Integration test configuration.

Provides a SqlEntityStore on a fresh SQLite database per test through
aiosqlite, exercising the same SQLAlchemy code path production uses
with asyncpg.

Usage:
    @pytest.mark.integration
    async def test_example(sql_store: SqlEntityStore) -> None:
        await sql_store.insert(Collection.USERS, record)
"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from sqlalchemy.ext.asyncio import create_async_engine

from taskhub.infrastructure.adapters.persistence import SqlEntityStore


@pytest.fixture
async def sql_store(tmp_path: Path) -> AsyncGenerator[SqlEntityStore, None]:
    """Initialized store on a per-test SQLite file; disposed afterwards."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'taskhub.db'}")
    store = SqlEntityStore(engine)
    await store.initialize()
    yield store
    await store.close()
