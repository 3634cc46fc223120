"""Attachment storage adapters."""

from taskhub.infrastructure.adapters.storage.local_file_storage import (
    LocalFileStorage,
    unique_name,
)

__all__: list[str] = ["LocalFileStorage", "unique_name"]
