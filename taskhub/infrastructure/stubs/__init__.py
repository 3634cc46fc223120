"""In-memory stubs for TaskHub ports (development and tests)."""

from taskhub.infrastructure.stubs.entity_store_stub import EntityStoreStub
from taskhub.infrastructure.stubs.file_storage_stub import FileStorageStub

__all__: list[str] = ["EntityStoreStub", "FileStorageStub"]
