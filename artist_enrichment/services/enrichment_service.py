"""Best-effort artist enrichment for concert records.

Sequences the providers against one caller-owned record:

  1. DIRECTORY -- MusicBrainz resolves the name to an MBID, genres and
                  (often) a Wikipedia link.
  2. SUMMARY   -- Wikipedia supplies description and image data.  Attempts
                  run in order and the first non-empty result wins: the
                  exact link from step 1 (or from an earlier run), then a
                  name search.  A search hit's page URL is kept as the
                  record's link so the next run can skip the search.
  3. IMAGE     -- The thumbnail (or original) is downloaded and stored.

Every step is isolated.  An exception in one step is logged and the step
simply contributes nothing; the record keeps whatever the other steps
found, and ``enrich`` never raises.  Creating or editing a concert must not
fail because MusicBrainz is slow or Wikipedia is down.

The service holds no state between calls.  Caching lives in the providers,
so calling ``enrich`` twice on an unchanged record is cheap and writes the
same values again.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from functools import partial
from typing import TypeVar

import structlog

from artist_enrichment.interfaces.encyclopedia_provider import IEncyclopediaProvider
from artist_enrichment.interfaces.enrichment_target import EnrichmentTarget
from artist_enrichment.interfaces.music_directory_provider import IMusicDirectoryProvider
from artist_enrichment.models.artist import DirectoryMatch, EncyclopediaSummary
from artist_enrichment.models.enrichment import EnrichmentReport, SummarySource
from artist_enrichment.services.image_fetcher import ImageFetcher
from artist_enrichment.utils.errors import EnrichmentError
from artist_enrichment.utils.logging import get_logger
from artist_enrichment.utils.text_normalizer import (
    DEFAULT_DESCRIPTION_MAX_LENGTH,
    normalize_query,
    truncate_description,
)

T = TypeVar("T")

SummaryAttempt = tuple[SummarySource, Callable[[], Awaitable[EncyclopediaSummary | None]]]


class ArtistEnrichmentService:
    """Writes directory, encyclopedia and image data onto artist records.

    All collaborators are injected, so tests can pass mocks and callers
    can swap providers without touching this class.
    """

    def __init__(
        self,
        directory: IMusicDirectoryProvider,
        encyclopedia: IEncyclopediaProvider,
        image_fetcher: ImageFetcher,
        description_max_length: int = DEFAULT_DESCRIPTION_MAX_LENGTH,
    ) -> None:
        self._directory = directory
        self._encyclopedia = encyclopedia
        self._image_fetcher = image_fetcher
        self._description_max_length = description_max_length
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # -- Public API -----------------------------------------------------------

    async def enrich(self, record: EnrichmentTarget) -> None:
        """Fill the record's enrichment fields from the providers.

        Only fields with data are written: a directory match without genres
        leaves previously stored genres alone.  Use :meth:`re_enrich` to
        start from a clean slate.
        """
        name = normalize_query(record.name)
        if not name:
            return

        report = await self._lookup(name, known_reference_url=record.reference_url)

        if report.match is not None:
            record.canonical_id = report.match.id
            if report.match.genres:
                record.genres = list(report.match.genres)
        if report.reference_url is not None:
            record.reference_url = report.reference_url
        if report.description is not None:
            record.description = report.description

        if report.image_url is None:
            self._logger.info("No image available", artist=name, has_summary=report.found_summary)
        else:
            image_path = await self._run_step(
                "image",
                name,
                partial(self._image_fetcher.fetch_and_store, report.image_url, name, record.id),
            )
            if image_path is not None:
                record.image_path = image_path

        self._logger.info(
            "Artist enrichment complete",
            artist=name,
            canonical_id=record.canonical_id,
            genres=record.genres,
            summary_source=report.summary_source.value if report.summary_source else None,
            has_image=record.image_path is not None,
        )

    async def re_enrich(self, record: EnrichmentTarget) -> None:
        """Discard all enrichment data (and the stored image), then enrich.

        Needed when the record's name changes: the old MBID, link and image
        belong to a different artist and must not survive.
        """
        await self._run_step(
            "delete_image",
            normalize_query(record.name),
            partial(self._image_fetcher.delete, record.image_path),
        )

        record.canonical_id = None
        record.genres = None
        record.reference_url = None
        record.description = None
        record.image_path = None

        await self.enrich(record)

    async def delete_image(self, public_path: str | None) -> None:
        """Delete a stored image, e.g. when its record is deleted."""
        await self._image_fetcher.delete(public_path)

    async def inspect(self, name: str) -> EnrichmentReport:
        """Dry run: report what :meth:`enrich` would write for *name*.

        Runs the same lookups but touches no record and downloads nothing.
        """
        query = normalize_query(name)
        if not query:
            return EnrichmentReport(query=query)
        return await self._lookup(query)

    # -- Lookup pipeline -------------------------------------------------------

    async def _lookup(
        self,
        name: str,
        known_reference_url: str | None = None,
    ) -> EnrichmentReport:
        """Resolve directory match and summary for *name* without side effects."""
        match: DirectoryMatch | None = await self._run_step(
            "directory", name, partial(self._directory.resolve, name)
        )

        reference_url = (match.reference_url if match else None) or known_reference_url
        summary, source = await self._resolve_summary(name, reference_url)

        if source is SummarySource.SEARCH and summary.canonical_url:
            reference_url = summary.canonical_url

        description = None
        if summary is not None and summary.long_text:
            description = truncate_description(summary.long_text, self._description_max_length)

        return EnrichmentReport(
            query=name,
            match=match,
            summary=summary,
            summary_source=source,
            reference_url=reference_url,
            description=description,
            image_url=summary.image_url if summary else None,
        )

    def _summary_attempts(self, name: str, reference_url: str | None) -> list[SummaryAttempt]:
        """Ordered summary sources; the first one returning data wins."""
        attempts: list[SummaryAttempt] = []
        if reference_url:
            attempts.append(
                (SummarySource.REFERENCE_URL, partial(self._encyclopedia.resolve_by_url, reference_url))
            )
        attempts.append((SummarySource.SEARCH, partial(self._encyclopedia.resolve_by_query, name)))
        return attempts

    async def _resolve_summary(
        self,
        name: str,
        reference_url: str | None,
    ) -> tuple[EncyclopediaSummary | None, SummarySource | None]:
        for source, attempt in self._summary_attempts(name, reference_url):
            summary = await self._run_step(f"summary_{source.value.lower()}", name, attempt)
            if summary is not None:
                return summary, source
        self._logger.info("No encyclopedia data", artist=name)
        return None, None

    async def _run_step(
        self,
        step: str,
        artist: str,
        func: Callable[[], Awaitable[T]],
    ) -> T | None:
        """Await *func*; any exception is logged and turned into ``None``.

        Provider errors are expected from time to time and logged as
        warnings; anything else indicates a bug and is logged with a
        traceback.  Either way the pipeline carries on.
        """
        try:
            return await func()
        except EnrichmentError as exc:
            self._logger.warning(
                "Enrichment step failed",
                step=step,
                artist=artist,
                provider=exc.provider_name,
                error=exc.message,
            )
        except Exception as exc:
            self._logger.error(
                "Unexpected error during enrichment step",
                step=step,
                artist=artist,
                error=str(exc),
                exc_info=True,
            )
        return None
