"""UTC timestamp helpers shared by the domain models."""

from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes read back from storage.

    Some stores (SQLite) drop tzinfo on the way out. Values are always
    written in UTC so a naive value is UTC by construction.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
