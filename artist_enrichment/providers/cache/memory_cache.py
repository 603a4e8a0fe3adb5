"""In-memory cache provider using cachetools.TLRUCache.

Simple, fast cache suitable for single-process deployments.  Can be swapped
for Redis or another backend via the ICacheProvider interface.

``TLRUCache`` (rather than ``TTLCache``) is used because every entry carries
its own time-to-use: MusicBrainz hits live for a week, misses for an hour,
and both share this one cache.
"""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable
from typing import Any, NamedTuple, TypeVar

import structlog
from cachetools import TLRUCache

from artist_enrichment.interfaces.cache_provider import ICacheProvider, TTLSpec

logger = structlog.get_logger(logger_name=__name__)

T = TypeVar("T")


class _Entry(NamedTuple):
    value: Any
    ttl: float


def _time_to_use(_key: str, entry: _Entry, now: float) -> float:
    return now + entry.ttl


class MemoryCacheProvider(ICacheProvider):
    """In-memory per-entry-TTL cache backed by ``cachetools.TLRUCache``.

    Parameters
    ----------
    max_size:
        Maximum number of entries before the least-recently-used entry
        is evicted.
    timer:
        Monotonic time source.  Tests pass a fake clock to expire entries
        without sleeping.
    """

    def __init__(
        self,
        max_size: int = 1000,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._cache: TLRUCache[str, _Entry] = TLRUCache(
            maxsize=max_size, ttu=_time_to_use, timer=timer
        )

    # ------------------------------------------------------------------
    # ICacheProvider implementation
    # ------------------------------------------------------------------

    async def get_or_compute(
        self,
        key: str,
        compute: Callable[[], Awaitable[T]],
        ttl: TTLSpec,
    ) -> T:
        """Return the cached value for *key*, or compute, store and return it."""
        entry = self._cache.get(key)
        if entry is not None:
            logger.debug("cache_hit", key=key)
            return entry.value

        logger.debug("cache_miss", key=key)
        value = await compute()
        seconds = ttl(value) if callable(ttl) else ttl
        self._cache[key] = _Entry(value, float(seconds))
        logger.debug("cache_set", key=key, ttl=seconds)
        return value
