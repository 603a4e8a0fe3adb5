"""Abstract base class for image storage.

An image store owns a writable location that is also served to browsers.
It writes raw bytes under a filename and hands back the public
(web-relative) path, e.g. ``/images/artists/butterwegge-1a2b3c4d.jpg``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class IImageStore(ABC):
    """Contract for binary image storage addressable by a public path."""

    @abstractmethod
    async def save(self, filename: str, data: bytes) -> str:
        """Write *data* as *filename*, creating directories as needed.

        Returns
        -------
        str
            The public path of the stored file.

        Raises
        ------
        artist_enrichment.utils.errors.StorageError
            If the directory cannot be created or the write fails.
        """

    @abstractmethod
    async def delete(self, public_path: str | None) -> bool:
        """Delete the file behind *public_path*.

        A ``None``/empty path or a missing file is a silent no-op.

        Returns
        -------
        bool
            ``True`` if a file was removed.
        """
