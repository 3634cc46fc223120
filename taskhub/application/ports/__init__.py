"""Ports (protocols) for TaskHub collaborators."""

from taskhub.application.ports.credentials import (
    PasswordHasherProtocol,
    TokenClaims,
    TokenCodecProtocol,
)
from taskhub.application.ports.entity_store import (
    UNIQUE_FIELDS,
    Collection,
    EntityStoreProtocol,
    Record,
)
from taskhub.application.ports.file_storage import FileStorageProtocol

__all__: list[str] = [
    "UNIQUE_FIELDS",
    "Collection",
    "EntityStoreProtocol",
    "FileStorageProtocol",
    "PasswordHasherProtocol",
    "Record",
    "TokenClaims",
    "TokenCodecProtocol",
]
