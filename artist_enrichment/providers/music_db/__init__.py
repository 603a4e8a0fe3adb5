"""Music-metadata directory providers.

MusicBrainzProvider resolves a user-entered artist name to an MBID, genre
names and a Wikipedia link.  It is the first step of every enrichment run.
"""

from artist_enrichment.providers.music_db.musicbrainz_provider import (
    ArtistCandidate,
    MusicBrainzProvider,
    build_musicbrainz_client,
)

__all__ = ["ArtistCandidate", "MusicBrainzProvider", "build_musicbrainz_client"]
