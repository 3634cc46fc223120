"""Database engine bootstrap (SQLAlchemy async).

URL handling:
    postgres://... and postgresql://...  -> postgresql+asyncpg://...
    sqlite:///...                        -> sqlite+aiosqlite:///...
    URLs that already name an async driver are used as given.

Usage:
    engine = create_engine_from_config(config)
    store = SqlEntityStore(engine)
"""

from __future__ import annotations

import structlog
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from taskhub.config import AppConfig

logger = structlog.get_logger(__name__)


def to_async_url(url: str) -> str:
    """Rewrite a database URL to its async driver form.

    Raises:
        ValueError: If the URL is empty.
    """
    if not url:
        raise ValueError("DATABASE_URL is empty")
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("sqlite://"):
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return url


def masked_url(url: str) -> str:
    """URL with the password hidden, for logging."""
    return make_url(url).render_as_string(hide_password=True)


def create_engine_from_config(config: AppConfig) -> AsyncEngine:
    """Create the async engine for ``config.database_url``.

    Raises:
        ValueError: If no database URL is configured.
    """
    if not config.database_url:
        raise ValueError("DATABASE_URL is not configured")

    url = to_async_url(config.database_url)
    log = logger.bind(component="database_bootstrap")
    log.info("creating_database_engine", url=masked_url(url))

    options: dict[str, object] = {"echo": config.sqlalchemy_echo}
    if not url.startswith("sqlite"):
        options["pool_pre_ping"] = True
    return create_async_engine(url, **options)


__all__ = ["create_engine_from_config", "masked_url", "to_async_url"]
