"""Local disk implementation of FileStorageProtocol.

Files are written under the upload directory with a collision-free name
``<epoch-ms>-<random><ext>``; the returned handle is
``"<upload_dir>/<name>"``. Any file type is accepted.
"""

from __future__ import annotations

import asyncio
import secrets
import time
from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)


def unique_name(filename: str) -> str:
    """Build ``<epoch-ms>-<random><ext>`` keeping the original extension."""
    suffix = Path(filename or "").suffix
    return f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{suffix}"


class LocalFileStorage:
    """Stores attachments in a directory on local disk."""

    def __init__(self, upload_dir: str | Path = "uploads") -> None:
        self._upload_dir = Path(upload_dir)

    @property
    def upload_dir(self) -> Path:
        return self._upload_dir

    async def store(self, filename: str, content: bytes) -> str:
        name = unique_name(filename)
        await asyncio.to_thread(self._write, name, content)
        logger.info("attachment_stored", name=name, size=len(content))
        return f"{self._upload_dir.as_posix()}/{name}"

    async def remove(self, path: str) -> None:
        name = Path(path).name
        await asyncio.to_thread((self._upload_dir / name).unlink, missing_ok=True)
        logger.info("attachment_removed", name=name)

    def _write(self, name: str, content: bytes) -> None:
        self._upload_dir.mkdir(parents=True, exist_ok=True)
        with open(self._upload_dir / name, "wb") as f:
            f.write(content)
