"""Artist enrichment domain models -- re-exports all public model classes.

    - artist.py     -- Provider results and the enrichable record
    - enrichment.py -- Dry-run inspection report
"""

from __future__ import annotations

from artist_enrichment.models.artist import (
    ArtistKind,
    ArtistRecord,
    DirectoryMatch,
    EncyclopediaSummary,
)
from artist_enrichment.models.enrichment import EnrichmentReport, SummarySource

__all__ = [
    "ArtistKind",
    "ArtistRecord",
    "DirectoryMatch",
    "EncyclopediaSummary",
    "EnrichmentReport",
    "SummarySource",
]
