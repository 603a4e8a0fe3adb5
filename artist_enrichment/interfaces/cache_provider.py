"""Abstract base class for cache service providers.

Defines the contract for key-value caching used by the provider clients
(MusicBrainz lookups, Wikipedia summaries).  Implementations may use an
in-memory dict, Redis, or any other storage backend; the adapter pattern
allows the backend to be swapped without touching the clients.

The only operation is :meth:`ICacheProvider.get_or_compute`; no caller
reads or writes an entry outside of it.  Its TTL is chosen per call -- and
may depend on the computed value -- because the MusicBrainz client caches
hits for a week but misses for only an hour.
A cached ``None`` is a hit, not a miss.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar, Union

T = TypeVar("T")

# Seconds, or a function of the computed value returning seconds.
TTLSpec = Union[int, float, Callable[[Any], Union[int, float]]]


class ICacheProvider(ABC):
    """Contract for key-value cache services.

    All operations are async to allow for network-backed stores (e.g. Redis)
    without blocking the event loop.
    """

    @abstractmethod
    async def get_or_compute(
        self,
        key: str,
        compute: Callable[[], Awaitable[T]],
        ttl: TTLSpec,
    ) -> T:
        """Return the value cached under *key*, computing it on a miss.

        Parameters
        ----------
        key:
            The cache key.
        compute:
            Zero-argument coroutine function producing the value.  If it
            raises, nothing is cached and the exception propagates.
        ttl:
            Time-to-live in seconds for a freshly computed value, or a
            callable that receives the computed value and returns the TTL.

        Returns
        -------
        T
            The cached or freshly computed value (which may be ``None``).
        """
