"""Local-disk image store implementing IImageStore.

Images are written below the web server's public directory so they can be
served directly: ``<public_dir>/<image_dir>/<filename>`` on disk becomes
``/<image_dir>/<filename>`` in the browser.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import structlog

from artist_enrichment.interfaces.image_store import IImageStore
from artist_enrichment.utils.errors import ConfigurationError, StorageError

logger = structlog.get_logger(logger_name=__name__)


class LocalImageStore(IImageStore):
    """Stores images as plain files under a public directory.

    Parameters
    ----------
    public_dir:
        Filesystem root that the web server exposes at ``/``.
    image_dir:
        Sub-directory (relative to *public_dir*) for artist images.

    Raises
    ------
    ConfigurationError
        If *public_dir* is empty.  This is a wiring mistake, not a runtime
        condition, so it is the one error allowed to reach callers.
    """

    def __init__(self, public_dir: str | Path, image_dir: str = "images/artists") -> None:
        if not str(public_dir).strip():
            raise ConfigurationError("LocalImageStore requires a public directory")
        self._public_dir = Path(public_dir)
        self._image_dir = image_dir.strip("/")

    @property
    def target_dir(self) -> Path:
        return self._public_dir / self._image_dir

    async def save(self, filename: str, data: bytes) -> str:
        """Write *data* and return its public path."""
        target_path = self.target_dir / filename
        try:
            target_path.parent.mkdir(parents=True, exist_ok=True)
            await asyncio.to_thread(target_path.write_bytes, data)
        except OSError as exc:
            raise StorageError(f"Failed to write {target_path}: {exc}") from exc

        return f"/{self._image_dir}/{filename}"

    async def delete(self, public_path: str | None) -> bool:
        """Remove the file behind *public_path*; missing files are ignored."""
        if not public_path:
            return False

        file_path = self._public_dir / public_path.lstrip("/")
        # Refuse paths that climb out of the public directory ("/../etc").
        if not file_path.resolve().is_relative_to(self._public_dir.resolve()):
            logger.warning("image_delete_outside_public_dir", path=public_path)
            return False

        if not file_path.is_file():
            return False

        try:
            file_path.unlink()
        except OSError as exc:
            logger.warning("image_delete_failed", path=public_path, error=str(exc))
            return False

        logger.info("image_deleted", path=public_path)
        return True
