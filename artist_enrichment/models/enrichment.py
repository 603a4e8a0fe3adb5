"""Dry-run report model produced by ``ArtistEnrichmentService.inspect``."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from artist_enrichment.models.artist import DirectoryMatch, EncyclopediaSummary


class SummarySource(str, Enum):  # noqa: UP042 -- StrEnum requires Python 3.11+
    """Which attempt in the summary chain produced the encyclopedia data."""

    REFERENCE_URL = "REFERENCE_URL"  # exact link taken from the directory match
    SEARCH = "SEARCH"                # free-text search fallback


class EnrichmentReport(BaseModel):
    """Everything an ``enrich`` call would write, without writing it.

    ``image_url`` is the remote image that would be downloaded; nothing is
    fetched or stored while building the report.
    """

    model_config = ConfigDict(frozen=True)

    query: str
    match: DirectoryMatch | None = None
    summary: EncyclopediaSummary | None = None
    summary_source: SummarySource | None = None
    reference_url: str | None = None
    description: str | None = None
    image_url: str | None = None

    @property
    def found_directory_match(self) -> bool:
        return self.match is not None

    @property
    def found_summary(self) -> bool:
        return self.summary is not None
