from __future__ import annotations

from pathlib import Path

import pytest

from restaurant_backend.errors import StorageError
from restaurant_backend.storage.config import StorageConfig
from restaurant_backend.storage.filesystem import FileSystemStorage

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def _storage(tmp_path: Path, **overrides) -> FileSystemStorage:
    return FileSystemStorage(StorageConfig(location=tmp_path / "uploads", **overrides))


def test_init_creates_root_directory(tmp_path: Path):
    storage = _storage(tmp_path)
    assert storage.root.is_dir()


def test_store_then_load_returns_same_bytes(tmp_path: Path):
    storage = _storage(tmp_path)

    stored = storage.store(PNG_BYTES, "image/png", "dinner.PNG", "abc123")

    assert stored == "abc123.png"
    path = storage.load(stored)
    assert path is not None
    assert path.read_bytes() == PNG_BYTES


@pytest.mark.parametrize("filename", ["photo.jpg", "photo.jpeg", "photo.gif", "nested/dir/photo.png"])
def test_store_accepts_allowed_extensions(tmp_path: Path, filename: str):
    storage = _storage(tmp_path)
    stored = storage.store(PNG_BYTES, "image/jpeg", filename, "id1")
    assert stored == "id1." + filename.rsplit(".", 1)[1]


def test_store_overwrites_existing_file(tmp_path: Path):
    storage = _storage(tmp_path)
    storage.store(b"first", "image/png", "a.png", "same")
    storage.store(b"second", "image/png", "b.png", "same")
    assert storage.load("same.png").read_bytes() == b"second"


def test_store_accepts_exactly_max_size(tmp_path: Path):
    storage = _storage(tmp_path, max_file_size=10)
    assert storage.store(b"x" * 10, "image/png", "a.png", "edge") == "edge.png"


class TestStoreRejects:
    def _assert_rejected(self, storage: FileSystemStorage, *args, match: str):
        with pytest.raises(StorageError, match=match):
            storage.store(*args)
        assert list(storage.root.iterdir()) == []

    def test_empty_payload(self, tmp_path: Path):
        self._assert_rejected(_storage(tmp_path), b"", "image/png", "a.png", "x", match="empty")

    def test_oversize_payload(self, tmp_path: Path):
        storage = _storage(tmp_path)
        data = b"x" * (5 * 1024 * 1024 + 1)
        self._assert_rejected(storage, data, "image/png", "a.png", "x", match="too large")

    def test_blank_filename(self, tmp_path: Path):
        self._assert_rejected(_storage(tmp_path), PNG_BYTES, "image/png", "  ", "x", match="filename")

    def test_missing_extension(self, tmp_path: Path):
        self._assert_rejected(_storage(tmp_path), PNG_BYTES, "image/png", "photo", "x", match="extension")

    def test_disallowed_extension(self, tmp_path: Path):
        self._assert_rejected(_storage(tmp_path), PNG_BYTES, "image/png", "script.exe", "x", match="exe")

    def test_non_image_content_type(self, tmp_path: Path):
        self._assert_rejected(
            _storage(tmp_path), PNG_BYTES, "application/pdf", "a.png", "x", match="content type",
        )

    def test_missing_content_type(self, tmp_path: Path):
        self._assert_rejected(_storage(tmp_path), PNG_BYTES, None, "a.png", "x", match="content type")

    def test_path_escape(self, tmp_path: Path):
        storage = _storage(tmp_path)
        with pytest.raises(StorageError, match="outside"):
            storage.store(PNG_BYTES, "image/png", "a.png", "../escaped")
        assert not (tmp_path / "escaped.png").exists()


def test_load_missing_file_returns_none(tmp_path: Path):
    assert _storage(tmp_path).load("nothing.png") is None


def test_load_rejects_path_outside_root(tmp_path: Path):
    (tmp_path / "secret.txt").write_text("nope")
    storage = _storage(tmp_path)
    with pytest.raises(StorageError):
        storage.load("../secret.txt")
