"""Abstract base class for encyclopedia providers.

An encyclopedia provider turns either an exact page link or a free-text
name into an :class:`EncyclopediaSummary`.  Both entry points are
best-effort: failures and misses alike come back as ``None``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from artist_enrichment.models.artist import EncyclopediaSummary


class IEncyclopediaProvider(ABC):
    """Contract for free-text encyclopedias (Wikipedia today)."""

    @abstractmethod
    async def resolve_by_query(self, query: str) -> EncyclopediaSummary | None:
        """Search by free text and summarize the first hit.

        Returns ``None`` for a blank query, no hit, or any failure.
        """

    @abstractmethod
    async def resolve_by_url(self, url: str) -> EncyclopediaSummary | None:
        """Summarize the page an exact URL points to, without searching.

        Returns ``None`` for a blank or unparseable URL, a missing page, or
        any failure.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier, e.g. ``"wikipedia"``."""
