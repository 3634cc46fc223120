"""In-memory stub for FileStorageProtocol."""

from __future__ import annotations

from itertools import count
from pathlib import PurePosixPath


class FileStorageStub:
    """Keeps uploaded files in a dict keyed by the returned path handle.

    Example:
        >>> storage = FileStorageStub()
        >>> path = await storage.store("notes.txt", b"hello")
        >>> storage.files[path]
        b'hello'
    """

    def __init__(self, prefix: str = "memory") -> None:
        self._prefix = prefix
        self._counter = count(1)
        self.files: dict[str, bytes] = {}

    async def store(self, filename: str, content: bytes) -> str:
        suffix = PurePosixPath(filename).suffix
        path = f"{self._prefix}/{next(self._counter)}{suffix}"
        self.files[path] = content
        return path

    async def remove(self, path: str) -> None:
        self.files.pop(path, None)
