"""File storage protocol for task attachments.

The core never holds file bytes beyond the upload call: storage returns
a path handle and only that string is persisted on the task.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileStorageProtocol(Protocol):
    """Protocol for storing uploaded attachments."""

    @abstractmethod
    async def store(self, filename: str, content: bytes) -> str:
        """Persist an uploaded file.

        Args:
            filename: Original client-side filename (used for its extension).
            content: Raw file bytes.

        Returns:
            Opaque path handle to store on the task.
        """
        ...

    @abstractmethod
    async def remove(self, path: str) -> None:
        """Delete a file previously returned by ``store``.

        A handle that no longer resolves is ignored.
        """
        ...
