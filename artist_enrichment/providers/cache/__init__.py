"""Cache providers.

In-memory per-entry-TTL cache shared by the MusicBrainz and Wikipedia
clients.  Keys are namespaced per client (``mb_artist_``, ``wiki_artist_``,
``wiki_url_``), so one instance serves both.

MemoryCacheProvider is not shared across processes.  For multi-worker
deployments, swap in a Redis adapter implementing ICacheProvider without
changing any client code.
"""

from artist_enrichment.providers.cache.memory_cache import MemoryCacheProvider

__all__ = ["MemoryCacheProvider"]
