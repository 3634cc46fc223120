"""SQLAlchemy persistence adapter."""

from taskhub.infrastructure.adapters.persistence.sql_entity_store import (
    SqlEntityStore,
    compile_filter,
    escape_like,
)
from taskhub.infrastructure.adapters.persistence.tables import TABLES, metadata

__all__: list[str] = [
    "TABLES",
    "SqlEntityStore",
    "compile_filter",
    "escape_like",
    "metadata",
]
