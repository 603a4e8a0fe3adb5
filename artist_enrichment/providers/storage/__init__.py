"""Image storage providers."""

from artist_enrichment.providers.storage.local_image_store import LocalImageStore

__all__ = ["LocalImageStore"]
