"""Domain models for artist enrichment.

Defines Pydantic v2 models for the two provider results (``DirectoryMatch``
from MusicBrainz, ``EncyclopediaSummary`` from Wikipedia) and for the
caller-owned record the enrichment service writes into (``ArtistRecord``).

Provider results use frozen config: they are cached and shared between
callers, so nobody may mutate them after construction.  ``ArtistRecord`` is
deliberately mutable -- the enrichment service assigns its fields in place
and the caller persists the record afterwards.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ArtistKind(str, Enum):  # noqa: UP042 -- StrEnum requires Python 3.11+
    """Coarse artist type reported by the metadata directory.

    MusicBrainz knows more types than these four; ``Group``, ``Orchestra``
    and ``Choir`` are all ensembles and map to GROUP, anything else that is
    not a person maps to OTHER, and a missing type maps to UNKNOWN.
    """

    GROUP = "GROUP"
    PERSON = "PERSON"
    OTHER = "OTHER"
    UNKNOWN = "UNKNOWN"


class DirectoryMatch(BaseModel):
    """The canonical identity of an artist resolved from MusicBrainz."""

    model_config = ConfigDict(frozen=True)

    id: str                                 # MusicBrainz artist id (MBID)
    display_name: str                       # Canonical name as listed by MusicBrainz
    kind: ArtistKind = ArtistKind.UNKNOWN
    genres: list[str] = Field(default_factory=list)  # At most 5, most used first
    reference_url: str | None = None        # Wikipedia page linked from MusicBrainz
    disambiguation: str | None = None       # e.g. "German punk band"


class EncyclopediaSummary(BaseModel):
    """Short profile of a Wikipedia page (REST ``page/summary`` resource)."""

    model_config = ConfigDict(frozen=True)

    title: str
    kind: str | None = None                 # "standard", "disambiguation", ...
    description: str | None = None          # One-line Wikidata description
    long_text: str | None = None            # Plain-text extract (first paragraph)
    image_url_thumbnail: str | None = None
    image_url_original: str | None = None
    canonical_url: str | None = None        # Desktop page URL

    @property
    def is_disambiguation(self) -> bool:
        """True when the page lists several meanings instead of one artist."""
        return self.kind == "disambiguation"

    @property
    def image_url(self) -> str | None:
        """Preferred image: the smaller thumbnail, else the original."""
        return self.image_url_thumbnail or self.image_url_original


class ArtistRecord(BaseModel):
    """A caller-owned concert/artist record that can be enriched.

    Implements the ``EnrichmentTarget`` contract.  ``id`` is read by the
    enrichment service (for stable image filenames) but never written.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str | None = None
    name: str
    canonical_id: str | None = None
    genres: list[str] | None = None
    reference_url: str | None = None
    description: str | None = None
    image_path: str | None = None

    @property
    def is_enriched(self) -> bool:
        """True once a previous run stored an id or a description."""
        return self.canonical_id is not None or self.description is not None
