"""Download artist images and store them under stable filenames.

The fetcher is a best-effort path: a failed download, an empty body or a
storage failure is logged and reported as ``None``; nothing here raises to
the enrichment service.

Filenames follow ``<slug(name)[:50]>-<suffix>.<ext>``.  The suffix is the
first 8 characters of the record id so a re-download for the same record
overwrites its previous file; records without an id (not persisted yet)
get the first 8 hex characters of an MD5 of the name and the current time
instead.
"""

from __future__ import annotations

import hashlib
import time
from collections.abc import Callable
from pathlib import PurePosixPath
from urllib.parse import urlparse

import httpx
import structlog

from artist_enrichment.interfaces.image_store import IImageStore
from artist_enrichment.utils.errors import ImageDownloadError, StorageError
from artist_enrichment.utils.text_normalizer import slugify

logger = structlog.get_logger(logger_name=__name__)

DEFAULT_EXTENSION = "jpg"

# Checked in order against the Content-Type header (substring match, so
# "image/jpeg; charset=binary" still resolves).
_MIME_EXTENSIONS: list[tuple[str, str]] = [
    ("image/jpeg", "jpg"),
    ("image/jpg", "jpg"),
    ("image/png", "png"),
    ("image/gif", "gif"),
    ("image/webp", "webp"),
    ("image/svg+xml", "svg"),
]
_URL_EXTENSIONS = {"jpg", "jpeg", "png", "gif", "webp", "svg"}


def guess_extension(content_type: str | None, url: str) -> str:
    """Infer a file extension from the Content-Type, then the URL, else ``jpg``."""
    content_type = (content_type or "").lower()
    for mime, extension in _MIME_EXTENSIONS:
        if mime in content_type:
            return extension

    suffix = PurePosixPath(urlparse(url).path).suffix.lstrip(".").lower()
    if suffix in _URL_EXTENSIONS:
        return "jpg" if suffix == "jpeg" else suffix

    return DEFAULT_EXTENSION


def build_filename(
    subject_name: str,
    record_id: str | None,
    extension: str,
    now: float | None = None,
) -> str:
    """Build ``<slug>-<suffix>.<extension>`` for a stored image."""
    slug = slugify(subject_name)
    if record_id:
        suffix = record_id[:8]
    else:
        timestamp = int(now if now is not None else time.time())
        suffix = hashlib.md5(f"{subject_name}{timestamp}".encode()).hexdigest()[:8]
    return f"{slug}-{suffix}.{extension}"


class ImageFetcher:
    """Fetches remote images and hands the bytes to an image store.

    Parameters
    ----------
    http_client:
        Shared httpx client (redirects followed for Wikimedia upload URLs).
    image_store:
        Where bytes are written; also resolves public paths for deletion.
    user_agent:
        Client identification sent with every download.
    clock:
        Wall-clock source for the hash suffix of id-less records.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        image_store: IImageStore,
        user_agent: str,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._client = http_client
        self._store = image_store
        self._headers = {"User-Agent": user_agent}
        self._clock = clock

    async def fetch_and_store(
        self,
        image_url: str,
        subject_name: str,
        record_id: str | None = None,
    ) -> str | None:
        """Download *image_url* and return the stored image's public path.

        Returns ``None`` for non-2xx responses, empty bodies, transport
        errors and storage failures.
        """
        try:
            content, content_type = await self._download(image_url)
        except ImageDownloadError as exc:
            logger.warning("image_download_failed", url=image_url, error=exc.message)
            return None

        extension = guess_extension(content_type, image_url)
        filename = build_filename(subject_name, record_id, extension, now=self._clock())

        try:
            public_path = await self._store.save(filename, content)
        except StorageError as exc:
            logger.error("image_store_failed", artist=subject_name, error=str(exc))
            return None

        logger.info(
            "image_saved",
            artist=subject_name,
            path=public_path,
            bytes=len(content),
        )
        return public_path

    async def delete(self, public_path: str | None) -> None:
        """Delete a previously stored image; no-op for empty or missing paths."""
        await self._store.delete(public_path)

    async def _download(self, image_url: str) -> tuple[bytes, str | None]:
        try:
            response = await self._client.get(
                image_url, headers=self._headers, follow_redirects=True
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise ImageDownloadError(f"Request failed: {exc}") from exc

        if not 200 <= response.status_code < 300:
            raise ImageDownloadError(f"HTTP {response.status_code}")

        content = response.content
        if not content:
            raise ImageDownloadError("Empty response body")

        return content, response.headers.get("content-type")
