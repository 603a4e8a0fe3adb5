"""Collaborator contracts for artist enrichment.

Every external dependency of the enrichment service is described here, so
concrete adapters (MusicBrainz, Wikipedia, local disk, in-memory cache) can
be swapped or mocked without touching business logic.
"""

from artist_enrichment.interfaces.cache_provider import ICacheProvider
from artist_enrichment.interfaces.encyclopedia_provider import IEncyclopediaProvider
from artist_enrichment.interfaces.enrichment_target import EnrichmentTarget
from artist_enrichment.interfaces.image_store import IImageStore
from artist_enrichment.interfaces.music_directory_provider import IMusicDirectoryProvider

__all__ = [
    "EnrichmentTarget",
    "ICacheProvider",
    "IEncyclopediaProvider",
    "IImageStore",
    "IMusicDirectoryProvider",
]
