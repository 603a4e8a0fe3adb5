"""Unit tests for ImageFetcher and its filename helpers."""

from __future__ import annotations

import hashlib
from pathlib import Path
from unittest.mock import AsyncMock

import httpx
import pytest

from artist_enrichment.providers.storage.local_image_store import LocalImageStore
from artist_enrichment.services.image_fetcher import (
    ImageFetcher,
    build_filename,
    guess_extension,
)
from artist_enrichment.utils.errors import StorageError
from tests.helpers import make_response, route_client

_IMAGE_URL = "https://upload.wikimedia.org/thumb/butterwegge.jpg"
_PNG_BYTES = b"\x89PNG\r\n\x1a\nfake"


class TestGuessExtension:
    @pytest.mark.parametrize(
        ("content_type", "url", "expected"),
        [
            ("image/png", "https://x/img", "png"),
            ("image/jpeg; charset=binary", "https://x/img.png", "jpg"),
            ("image/jpg", "https://x/img", "jpg"),
            ("image/gif", "https://x/img", "gif"),
            ("image/webp", "https://x/img", "webp"),
            ("image/svg+xml", "https://x/img", "svg"),
            (None, "https://x/a/photo.webp", "webp"),
            ("application/octet-stream", "https://x/a/photo.webp?width=300", "webp"),
            ("", "https://x/a/photo.JPEG", "jpg"),
            (None, "https://x/a/photo.tiff", "jpg"),
            (None, "https://x/a/photo", "jpg"),
        ],
    )
    def test_extension(self, content_type: str | None, url: str, expected: str) -> None:
        assert guess_extension(content_type, url) == expected


class TestBuildFilename:
    def test_uses_record_id_prefix(self) -> None:
        name = build_filename("Butterwegge", "4f2a9c1e-7b3d-4e8a", "jpg")
        assert name == "butterwegge-4f2a9c1e.jpg"

    def test_hash_suffix_without_record_id(self) -> None:
        expected_suffix = hashlib.md5(b"Butterwegge1700000000").hexdigest()[:8]
        assert build_filename("Butterwegge", None, "png", now=1700000000.9) == (
            f"butterwegge-{expected_suffix}.png"
        )

    def test_long_names_are_capped(self) -> None:
        name = build_filename("x" * 80, "abcdefgh", "jpg")
        assert name == "x" * 50 + "-abcdefgh.jpg"


class TestFetchAndStore:
    @pytest.fixture()
    def store(self) -> AsyncMock:
        store = AsyncMock()
        store.save = AsyncMock(side_effect=lambda filename, data: f"/images/artists/{filename}")
        return store

    def _fetcher(self, client: AsyncMock, store: AsyncMock | LocalImageStore) -> ImageFetcher:
        return ImageFetcher(client, store, user_agent="UA/1.0", clock=lambda: 1700000000.0)

    @pytest.mark.asyncio
    async def test_downloads_and_stores(self, store: AsyncMock) -> None:
        client = route_client(
            {_IMAGE_URL: make_response(content=_PNG_BYTES, headers={"content-type": "image/png"})}
        )

        path = await self._fetcher(client, store).fetch_and_store(
            _IMAGE_URL, "Butterwegge", "4f2a9c1e-7b3d"
        )

        assert path == "/images/artists/butterwegge-4f2a9c1e.png"
        store.save.assert_awaited_once_with("butterwegge-4f2a9c1e.png", _PNG_BYTES)
        call = client.get.call_args
        assert call.kwargs["headers"] == {"User-Agent": "UA/1.0"}
        assert call.kwargs["follow_redirects"] is True

    @pytest.mark.asyncio
    async def test_writes_file_to_public_dir(self, public_dir: Path) -> None:
        client = route_client({_IMAGE_URL: make_response(content=b"jpegdata")})
        store = LocalImageStore(public_dir)

        path = await self._fetcher(client, store).fetch_and_store(_IMAGE_URL, "Butterwegge", "abcdef123")

        assert path == "/images/artists/butterwegge-abcdef12.jpg"
        assert (public_dir / "images" / "artists" / "butterwegge-abcdef12.jpg").read_bytes() == b"jpegdata"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [301, 403, 404, 500])
    async def test_non_success_status(self, store: AsyncMock, status: int) -> None:
        client = route_client({_IMAGE_URL: make_response(status, content=b"nope")})

        assert await self._fetcher(client, store).fetch_and_store(_IMAGE_URL, "X") is None
        store.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_body(self, store: AsyncMock) -> None:
        client = route_client({_IMAGE_URL: make_response(content=b"")})

        assert await self._fetcher(client, store).fetch_and_store(_IMAGE_URL, "X") is None
        store.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_transport_error(self, store: AsyncMock) -> None:
        client = route_client({_IMAGE_URL: httpx.ReadTimeout("slow")})

        assert await self._fetcher(client, store).fetch_and_store(_IMAGE_URL, "X") is None

    @pytest.mark.asyncio
    async def test_malformed_url(self, store: AsyncMock) -> None:
        client = route_client({_IMAGE_URL: httpx.InvalidURL("Invalid non-printable ASCII character")})

        assert await self._fetcher(client, store).fetch_and_store(_IMAGE_URL, "X") is None
        store.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_storage_error(self, store: AsyncMock) -> None:
        store.save = AsyncMock(side_effect=StorageError("disk full"))
        client = route_client({_IMAGE_URL: make_response(content=b"data")})

        assert await self._fetcher(client, store).fetch_and_store(_IMAGE_URL, "X", "id") is None

    @pytest.mark.asyncio
    async def test_delete_passes_through(self, store: AsyncMock) -> None:
        await self._fetcher(AsyncMock(), store).delete("/images/artists/x.jpg")
        store.delete.assert_awaited_once_with("/images/artists/x.jpg")
