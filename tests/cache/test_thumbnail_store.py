"""Tests for ThumbnailStore (flat key-addressed disk store)."""

from __future__ import annotations

from pathlib import Path

import pytest

from iGallery.cache.keys import derive_cache_key
from iGallery.cache.store import ThumbnailStore
from iGallery.errors import InvalidInputError, StorageError

KEY_A = derive_cache_key("/a.jpg", 1, 256)
KEY_B = derive_cache_key("/b.jpg", 1, 256)


class TestThumbnailStore:
    def test_directory_created_lazily(self, cache_dir: Path):
        store = ThumbnailStore(cache_dir)
        assert not cache_dir.exists()
        assert store.contains(KEY_A) is False
        store.write(KEY_A, b"jpeg")
        assert cache_dir.is_dir()

    def test_write_returns_absolute_named_path(self, cache_dir: Path):
        store = ThumbnailStore(cache_dir)
        path = store.write(KEY_A, b"jpeg-bytes")
        assert path.is_absolute()
        assert path.name == f"{KEY_A}.jpg"
        assert path.read_bytes() == b"jpeg-bytes"

    def test_contains_and_read(self, cache_dir: Path):
        store = ThumbnailStore(cache_dir)
        assert store.read(KEY_A) is None
        store.write(KEY_A, b"data")
        assert store.contains(KEY_A) is True
        assert store.read(KEY_A) == b"data"
        assert store.contains(KEY_B) is False

    def test_contains_does_not_read_content(self, cache_dir: Path, mocker):
        store = ThumbnailStore(cache_dir)
        store.write(KEY_A, b"data")
        spy = mocker.spy(Path, "read_bytes")
        assert store.contains(KEY_A)
        spy.assert_not_called()

    def test_overwrite(self, cache_dir: Path):
        store = ThumbnailStore(cache_dir)
        store.write(KEY_A, b"old")
        store.write(KEY_A, b"new")
        assert store.read(KEY_A) == b"new"

    def test_write_leaves_no_temp_files(self, cache_dir: Path):
        store = ThumbnailStore(cache_dir)
        store.write(KEY_A, b"one")
        store.write(KEY_B, b"two")
        assert sorted(p.name for p in cache_dir.iterdir()) == sorted([f"{KEY_A}.jpg", f"{KEY_B}.jpg"])

    def test_remove(self, cache_dir: Path):
        store = ThumbnailStore(cache_dir)
        store.write(KEY_A, b"data")
        assert store.remove(KEY_A) is True
        assert store.contains(KEY_A) is False

    def test_remove_missing(self, cache_dir: Path):
        store = ThumbnailStore(cache_dir)
        assert store.remove(KEY_A) is False

    def test_remove_failure_raises_storage_error(self, cache_dir: Path, mocker):
        store = ThumbnailStore(cache_dir)
        store.write(KEY_A, b"data")
        mocker.patch.object(Path, "unlink", side_effect=PermissionError("denied"))
        with pytest.raises(StorageError):
            store.remove(KEY_A)

    def test_write_failure_raises_storage_error(self, tmp_path: Path):
        blocker = tmp_path / "blocker"
        blocker.write_bytes(b"")
        store = ThumbnailStore(blocker / "thumbs")
        with pytest.raises(StorageError):
            store.write(KEY_A, b"data")

    @pytest.mark.parametrize("key", ["../escape", "", "g" * 64, KEY_A.upper()])
    def test_malformed_keys_rejected(self, cache_dir: Path, key: str):
        store = ThumbnailStore(cache_dir)
        with pytest.raises(InvalidInputError):
            store.contains(key)

    def test_iter_keys(self, cache_dir: Path):
        store = ThumbnailStore(cache_dir)
        assert list(store.iter_keys()) == []
        store.write(KEY_A, b"1")
        store.write(KEY_B, b"2")
        (cache_dir / "notes.txt").write_text("ignored")
        (cache_dir / "short.jpg").write_bytes(b"ignored")
        assert sorted(store.iter_keys()) == sorted([KEY_A, KEY_B])
