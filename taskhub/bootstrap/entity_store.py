"""Bootstrap wiring for the entity store.

No DATABASE_URL -> in-memory EntityStoreStub (data is lost on restart).
DATABASE_URL set -> SqlEntityStore on an async SQLAlchemy engine.
"""

from __future__ import annotations

import structlog

from taskhub.application.ports.entity_store import EntityStoreProtocol
from taskhub.bootstrap.database import create_engine_from_config
from taskhub.config import AppConfig
from taskhub.infrastructure.adapters.persistence import SqlEntityStore
from taskhub.infrastructure.stubs import EntityStoreStub

logger = structlog.get_logger(__name__)


def build_entity_store(config: AppConfig) -> EntityStoreProtocol:
    if not config.database_url:
        if config.is_production:
            logger.warning("in_memory_store_in_production")
        else:
            logger.info("using_in_memory_store")
        return EntityStoreStub()
    return SqlEntityStore(create_engine_from_config(config))


__all__ = ["build_entity_store"]
