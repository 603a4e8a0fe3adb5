"""Unit tests for MemoryCacheProvider (per-entry TTL cache)."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from artist_enrichment.providers.cache.memory_cache import MemoryCacheProvider
from tests.helpers import FakeClock


class TestGetOrCompute:
    @pytest.mark.asyncio
    async def test_computes_once_then_hits(self, cache: MemoryCacheProvider) -> None:
        compute = AsyncMock(return_value="value")

        assert await cache.get_or_compute("k", compute, ttl=60) == "value"
        assert await cache.get_or_compute("k", compute, ttl=60) == "value"

        compute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_cached_none_is_a_hit(self, cache: MemoryCacheProvider) -> None:
        compute = AsyncMock(return_value=None)

        assert await cache.get_or_compute("k", compute, ttl=60) is None
        assert await cache.get_or_compute("k", compute, ttl=60) is None

        compute.assert_awaited_once()
        assert "k" in cache._cache

    @pytest.mark.asyncio
    async def test_entry_expires_after_ttl(
        self, cache: MemoryCacheProvider, clock: FakeClock
    ) -> None:
        compute = AsyncMock(side_effect=["first", "second"])

        await cache.get_or_compute("k", compute, ttl=10)
        clock.advance(9)
        assert await cache.get_or_compute("k", compute, ttl=10) == "first"
        clock.advance(2)
        assert await cache.get_or_compute("k", compute, ttl=10) == "second"

    @pytest.mark.asyncio
    async def test_callable_ttl_depends_on_result(
        self, cache: MemoryCacheProvider, clock: FakeClock
    ) -> None:
        def ttl(value: str | None) -> int:
            return 3600 if value is None else 604800

        await cache.get_or_compute("miss", AsyncMock(return_value=None), ttl=ttl)
        await cache.get_or_compute("hit", AsyncMock(return_value="found"), ttl=ttl)

        clock.advance(3601)
        assert "miss" not in cache._cache
        assert "hit" in cache._cache

        clock.advance(604800)
        assert "hit" not in cache._cache

    @pytest.mark.asyncio
    async def test_compute_errors_are_not_cached(self, cache: MemoryCacheProvider) -> None:
        compute = AsyncMock(side_effect=[RuntimeError("down"), "ok"])

        with pytest.raises(RuntimeError):
            await cache.get_or_compute("k", compute, ttl=60)

        assert "k" not in cache._cache
        assert await cache.get_or_compute("k", compute, ttl=60) == "ok"


class TestEviction:
    @pytest.mark.asyncio
    async def test_max_size_evicts_least_recently_used(self, clock: FakeClock) -> None:
        cache = MemoryCacheProvider(max_size=2, timer=clock)
        for key in ("a", "b", "c"):
            await cache.get_or_compute(key, AsyncMock(return_value=key), ttl=100)

        assert "a" not in cache._cache
        assert "b" in cache._cache
        assert "c" in cache._cache
