"""Unit tests for LocalFileStorage."""

import re

from taskhub.infrastructure.adapters.storage import LocalFileStorage, unique_name


def test_unique_name_keeps_extension():
    name = unique_name("report.final.pdf")
    assert re.fullmatch(r"\d+-\d+\.pdf", name)


def test_unique_name_without_extension():
    assert re.fullmatch(r"\d+-\d+", unique_name("Makefile"))
    assert re.fullmatch(r"\d+-\d+", unique_name(""))


async def test_store_writes_file_and_returns_handle(tmp_path):
    upload_dir = tmp_path / "uploads"
    storage = LocalFileStorage(upload_dir)

    handle = await storage.store("notes.txt", b"hello")

    assert handle.startswith(f"{upload_dir.as_posix()}/")
    assert handle.endswith(".txt")
    name = handle.rsplit("/", 1)[-1]
    assert (upload_dir / name).read_bytes() == b"hello"


async def test_store_never_overwrites(tmp_path):
    storage = LocalFileStorage(tmp_path)

    first = await storage.store("same.txt", b"one")
    second = await storage.store("same.txt", b"two")

    assert first != second
    assert len(list(tmp_path.iterdir())) == 2


async def test_remove_deletes_stored_file(tmp_path):
    storage = LocalFileStorage(tmp_path / "uploads")
    handle = await storage.store("report.txt", b"data")

    await storage.remove(handle)

    assert list((tmp_path / "uploads").iterdir()) == []


async def test_remove_missing_file_is_ignored(tmp_path):
    storage = LocalFileStorage(tmp_path / "uploads")
    await storage.remove(f"{(tmp_path / 'uploads').as_posix()}/gone.txt")
