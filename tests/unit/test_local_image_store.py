"""Unit tests for LocalImageStore."""

from __future__ import annotations

from pathlib import Path

import pytest

from artist_enrichment.providers.storage.local_image_store import LocalImageStore
from artist_enrichment.utils.errors import ConfigurationError, StorageError


class TestLocalImageStore:
    def test_empty_public_dir_is_a_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError):
            LocalImageStore("  ")

    @pytest.mark.asyncio
    async def test_save_creates_directories(self, public_dir: Path) -> None:
        store = LocalImageStore(public_dir)

        path = await store.save("band-12345678.jpg", b"bytes")

        assert path == "/images/artists/band-12345678.jpg"
        assert (public_dir / "images/artists/band-12345678.jpg").read_bytes() == b"bytes"

    @pytest.mark.asyncio
    async def test_custom_image_dir(self, public_dir: Path) -> None:
        store = LocalImageStore(public_dir, image_dir="/media/bands/")

        assert await store.save("a.png", b"x") == "/media/bands/a.png"
        assert store.target_dir == public_dir / "media/bands"

    @pytest.mark.asyncio
    async def test_save_failure_raises_storage_error(self, tmp_path: Path) -> None:
        blocker = tmp_path / "public"
        blocker.write_text("not a directory")
        store = LocalImageStore(blocker)

        with pytest.raises(StorageError):
            await store.save("a.jpg", b"x")

    @pytest.mark.asyncio
    async def test_delete_existing(self, public_dir: Path) -> None:
        store = LocalImageStore(public_dir)
        path = await store.save("a.jpg", b"x")

        assert await store.delete(path) is True
        assert not (public_dir / "images/artists/a.jpg").exists()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", [None, "", "/images/artists/missing.jpg"])
    async def test_delete_noop(self, public_dir: Path, path: str | None) -> None:
        assert await LocalImageStore(public_dir).delete(path) is False

    @pytest.mark.asyncio
    async def test_delete_refuses_traversal(self, tmp_path: Path) -> None:
        public_dir = tmp_path / "public"
        public_dir.mkdir()
        outside = tmp_path / "secret.txt"
        outside.write_text("keep me")

        assert await LocalImageStore(public_dir).delete("/../secret.txt") is False
        assert outside.exists()
