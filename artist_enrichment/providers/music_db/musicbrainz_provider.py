"""MusicBrainz provider implementing IMusicDirectoryProvider.

Queries the MusicBrainz JSON web service (``/ws/2``) to resolve a free-text
artist name to an MBID, up to five genre names and a Wikipedia link.

A lookup costs two requests -- a search and a detail fetch -- and
MusicBrainz allows one request per second, so the detail fetch goes through
a :class:`RateLimitedCaller`.  Results are cached for a week; "no artist
found" is cached for only an hour because it is often a transient API
hiccup rather than a truly unknown band.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from urllib.parse import urlparse

import httpx
import structlog

from artist_enrichment.config.settings import Settings
from artist_enrichment.interfaces.cache_provider import ICacheProvider
from artist_enrichment.interfaces.music_directory_provider import IMusicDirectoryProvider
from artist_enrichment.models.artist import ArtistKind, DirectoryMatch
from artist_enrichment.utils.errors import DirectoryLookupError
from artist_enrichment.utils.rate_limiter import RateLimitedCaller
from artist_enrichment.utils.text_normalizer import cache_key, normalize_query

logger = structlog.get_logger(logger_name=__name__)

_CACHE_PREFIX = "mb_artist_"

# MusicBrainz artist types that denote an ensemble rather than one person.
_ENSEMBLE_TYPES = {"Group", "Orchestra", "Choir"}


@dataclass(frozen=True)
class ArtistCandidate:
    """One artist from the search response."""

    id: str
    score: int
    type: str | None


class MusicBrainzProvider(IMusicDirectoryProvider):
    """MusicBrainz artist directory with caching and rate limiting.

    MusicBrainz requires no API key, but clients must send a descriptive
    User-Agent and stay at or below one request per second.

    Parameters
    ----------
    settings:
        Application settings (base URL, user agent, TTLs, heuristic margin).
    cache:
        Cache shared with other providers; keys are namespaced.
    http_client:
        Optional injected client.  When omitted the provider builds its own,
        bound to IPv4 if ``settings.musicbrainz_force_ipv4`` is set, and
        closes it in :meth:`aclose`.
    rate_limiter:
        Optional injected limiter; defaults to one using
        ``settings.musicbrainz_min_interval``.
    """

    def __init__(
        self,
        settings: Settings,
        cache: ICacheProvider,
        http_client: httpx.AsyncClient | None = None,
        rate_limiter: RateLimitedCaller | None = None,
    ) -> None:
        self._settings = settings
        self._cache = cache
        self._base_url = settings.musicbrainz_base_url.rstrip("/")
        self._headers = {
            "User-Agent": settings.user_agent,
            "Accept": "application/json",
        }
        self._owns_client = http_client is None
        self._client = http_client or build_musicbrainz_client(settings)
        self._rate_limiter = rate_limiter or RateLimitedCaller(settings.musicbrainz_min_interval)

    # ------------------------------------------------------------------
    # IMusicDirectoryProvider implementation
    # ------------------------------------------------------------------

    async def resolve(self, query: str) -> DirectoryMatch | None:
        """Resolve *query* to the best-matching artist, or ``None``."""
        q = normalize_query(query)
        if not q:
            return None

        return await self._cache.get_or_compute(
            cache_key(_CACHE_PREFIX, q),
            lambda: self._lookup(q),
            ttl=self._ttl_for,
        )

    def get_provider_name(self) -> str:
        return "musicbrainz"

    async def aclose(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._owns_client:
            await self._client.aclose()

    # ------------------------------------------------------------------
    # Lookup steps
    # ------------------------------------------------------------------

    def _ttl_for(self, match: DirectoryMatch | None) -> int:
        if match is None:
            return self._settings.musicbrainz_miss_ttl
        return self._settings.musicbrainz_hit_ttl

    async def _lookup(self, query: str) -> DirectoryMatch | None:
        candidates = await self._search(query)
        if not candidates:
            logger.info("musicbrainz_no_artist_found", query=query)
            return None

        chosen = self.choose_candidate(candidates, self._settings.musicbrainz_group_score_margin)
        if chosen is not candidates[0]:
            logger.info(
                "musicbrainz_group_preferred",
                query=query,
                group_mbid=chosen.id,
                group_score=chosen.score,
                top_score=candidates[0].score,
                top_type=candidates[0].type,
            )

        match = await self._rate_limiter.call(self._fetch_details, chosen.id)
        logger.info(
            "musicbrainz_artist_resolved",
            query=query,
            mbid=match.id,
            name=match.display_name,
            genres=match.genres,
            has_reference_url=match.reference_url is not None,
        )
        return match

    async def _search(self, query: str) -> list[ArtistCandidate]:
        """Search for up to ``musicbrainz_search_limit`` artists, best score first."""
        data = await self._get_json(
            f"{self._base_url}/artist/",
            {
                "query": query,
                "fmt": "json",
                "limit": self._settings.musicbrainz_search_limit,
            },
            context=f"artist search for '{query}'",
        )
        self._rate_limiter.touch()

        candidates: list[ArtistCandidate] = []
        for artist in data.get("artists") or []:
            mbid = artist.get("id")
            if not mbid:
                continue
            try:
                score = int(artist.get("score", 0))
            except (TypeError, ValueError):
                score = 0
            candidates.append(ArtistCandidate(id=mbid, score=score, type=artist.get("type")))

        # Stable sort keeps the API's order among equal scores.
        candidates.sort(key=lambda c: c.score, reverse=True)
        logger.debug("musicbrainz_artist_search", query=query, result_count=len(candidates))
        return candidates

    @staticmethod
    def choose_candidate(
        candidates: list[ArtistCandidate], group_score_margin: int
    ) -> ArtistCandidate:
        """Pick the best candidate, preferring a band in a close contest.

        A person or organisation sharing a band's name (the professor
        "Butterwegge" versus the punk band Butterwegge) can outscore the
        band.  The best ensemble wins unless it trails the overall best by
        more than *group_score_margin* points.  *candidates* must be sorted
        by score, best first.
        """
        best_any = candidates[0]
        best_group = next((c for c in candidates if c.type in _ENSEMBLE_TYPES), None)
        if best_group is not None and best_any.score - best_group.score <= group_score_margin:
            return best_group
        return best_any

    async def _fetch_details(self, mbid: str) -> DirectoryMatch:
        """Fetch genres, tags and URL relationships for *mbid*."""
        data = await self._get_json(
            f"{self._base_url}/artist/{mbid}",
            {"inc": "url-rels+tags+genres", "fmt": "json"},
            context=f"artist details for '{mbid}'",
        )

        return DirectoryMatch(
            id=mbid,
            display_name=data.get("name") or "",
            kind=_map_kind(data.get("type")),
            genres=self._extract_genres(data),
            reference_url=self._extract_reference_url(data.get("relations") or []),
            disambiguation=data.get("disambiguation") or None,
        )

    async def _get_json(self, url: str, params: dict[str, Any], context: str) -> dict[str, Any]:
        try:
            response = await self._client.get(url, params=params, headers=self._headers)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as exc:
            raise DirectoryLookupError(
                message=f"HTTP {exc.response.status_code} during {context}",
                provider_name=self.get_provider_name(),
            ) from exc
        except httpx.HTTPError as exc:
            raise DirectoryLookupError(
                message=f"Request failed during {context}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        except ValueError as exc:
            raise DirectoryLookupError(
                message=f"Malformed JSON during {context}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if not isinstance(data, dict):
            raise DirectoryLookupError(
                message=f"Unexpected response shape during {context}",
                provider_name=self.get_provider_name(),
            )
        return data

    # ------------------------------------------------------------------
    # Response mapping
    # ------------------------------------------------------------------

    def _extract_genres(self, data: dict[str, Any]) -> list[str]:
        """Top genre names; curated ``genres`` first, community ``tags`` as fallback."""
        limit = self._settings.musicbrainz_max_genres
        for source in ("genres", "tags"):
            entries = [e for e in data.get(source) or [] if (e.get("name") or "").strip()]
            if entries:
                entries.sort(key=lambda e: e.get("count") or 0, reverse=True)
                return [e["name"].strip() for e in entries[:limit]]
        return []

    def _extract_reference_url(self, relations: list[dict[str, Any]]) -> str | None:
        """Pick the Wikipedia link in the preferred language, else any."""
        by_language: dict[str, str] = {}
        any_url: str | None = None

        for rel in relations:
            if rel.get("type") != "wikipedia":
                continue
            url = (rel.get("url") or {}).get("resource")
            if not isinstance(url, str) or not url:
                continue
            host = urlparse(url).hostname or ""
            language = host.split(".", 1)[0] if host.endswith("wikipedia.org") else ""
            by_language.setdefault(language, url)
            if any_url is None:
                any_url = url

        for language in self._settings.wikipedia_languages:
            if language in by_language:
                return by_language[language]
        return any_url


def _map_kind(raw_type: str | None) -> ArtistKind:
    if raw_type is None:
        return ArtistKind.UNKNOWN
    if raw_type in _ENSEMBLE_TYPES:
        return ArtistKind.GROUP
    if raw_type == "Person":
        return ArtistKind.PERSON
    return ArtistKind.OTHER


def build_musicbrainz_client(settings: Settings) -> httpx.AsyncClient:
    """Create the httpx client used for MusicBrainz.

    Binding the transport to ``0.0.0.0`` makes every connection IPv4;
    IPv6 routes to musicbrainz.org fail the TLS handshake on some networks.
    """
    transport = (
        httpx.AsyncHTTPTransport(local_address="0.0.0.0")
        if settings.musicbrainz_force_ipv4
        else None
    )
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout),
        transport=transport,
        follow_redirects=True,
    )
