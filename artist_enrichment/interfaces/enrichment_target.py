"""Structural contract for records the enrichment service writes into.

The record belongs to the caller (an ORM entity, a pydantic model, a plain
object).  The service only reads ``id`` and ``name`` and assigns the five
enrichment attributes; it never creates, deletes or persists records.
:class:`artist_enrichment.models.ArtistRecord` is the bundled
implementation.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class EnrichmentTarget(Protocol):
    """A mutable artist/concert record.

    Every enrichment attribute is independently nullable: a record with an
    id but no image is a valid end state, not an error.
    """

    id: str | None
    name: str
    canonical_id: str | None
    genres: list[str] | None
    reference_url: str | None
    description: str | None
    image_path: str | None
