"""Shared pytest fixtures for the artist enrichment test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from artist_enrichment.config.settings import Settings
from artist_enrichment.providers.cache.memory_cache import MemoryCacheProvider
from tests.helpers import FakeClock, make_settings


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> MemoryCacheProvider:
    """Empty cache driven by the fake clock."""
    return MemoryCacheProvider(max_size=100, timer=clock)


@pytest.fixture
def public_dir(tmp_path: Path) -> Path:
    return tmp_path / "public"
