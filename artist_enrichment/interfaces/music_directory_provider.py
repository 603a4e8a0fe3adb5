"""Abstract base class for music-metadata directory providers.

Defines the contract for resolving a free-text artist name to a canonical
identity (MusicBrainz today).  The enrichment service depends only on this
interface, so the directory can be swapped or stubbed in tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from artist_enrichment.models.artist import DirectoryMatch


class IMusicDirectoryProvider(ABC):
    """Contract for structured artist-metadata directories."""

    @abstractmethod
    async def resolve(self, query: str) -> DirectoryMatch | None:
        """Resolve *query* to the best-matching artist.

        Parameters
        ----------
        query:
            The artist or band name as entered by a user.

        Returns
        -------
        DirectoryMatch or None
            The chosen match, or ``None`` when the query is blank or the
            directory has no candidate.

        Raises
        ------
        artist_enrichment.utils.errors.DirectoryLookupError
            If the directory cannot be reached or returns malformed data.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier, e.g. ``"musicbrainz"``."""
