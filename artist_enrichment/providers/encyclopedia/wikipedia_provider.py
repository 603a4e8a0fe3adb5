"""Wikipedia provider implementing IEncyclopediaProvider.

Two entry points share one summary fetch:

* ``resolve_by_url`` -- the exact page link MusicBrainz stores for an
  artist.  The title and the language edition are both read from the URL,
  so an ``en.wikipedia.org`` link works even though the configured base is
  the German edition.  No search is involved, hence no disambiguation risk.
* ``resolve_by_query`` -- fallback for artists without a link: MediaWiki
  Action API full-text search on the configured edition, first hit wins.

Summaries come from the REST ``page/summary`` endpoint.  Hits and misses
alike are cached for a week; request and parse failures are logged and
reported as ``None`` without being cached, so the next run tries again.
"""

from __future__ import annotations

import re
from collections.abc import Awaitable, Callable
from typing import Any
from urllib.parse import quote, unquote, urlparse

import httpx
import structlog
from pydantic import ValidationError

from artist_enrichment.config.settings import Settings
from artist_enrichment.interfaces.cache_provider import ICacheProvider
from artist_enrichment.interfaces.encyclopedia_provider import IEncyclopediaProvider
from artist_enrichment.models.artist import EncyclopediaSummary
from artist_enrichment.utils.errors import EncyclopediaLookupError
from artist_enrichment.utils.text_normalizer import cache_key, normalize_query

logger = structlog.get_logger(logger_name=__name__)

_QUERY_CACHE_PREFIX = "wiki_artist_"
_URL_CACHE_PREFIX = "wiki_url_"
_WIKI_PATH = re.compile(r"/wiki/(.+)$")


class WikipediaProvider(IEncyclopediaProvider):
    """Wikipedia search + page summary client.

    Parameters
    ----------
    settings:
        Application settings (base edition, user agent, TTL, search limit).
    cache:
        Cache shared with other providers; keys are namespaced.
    http_client:
        Optional injected client; one is created (and closed by
        :meth:`aclose`) when omitted.
    """

    def __init__(
        self,
        settings: Settings,
        cache: ICacheProvider,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings
        self._cache = cache
        self._base_url = settings.wikipedia_base_url.rstrip("/")
        # Wikimedia asks browser-less clients to repeat the agent in Api-User-Agent.
        self._headers = {
            "User-Agent": settings.user_agent,
            "Api-User-Agent": settings.user_agent,
        }
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(settings.http_timeout),
            follow_redirects=True,
        )

    # ------------------------------------------------------------------
    # IEncyclopediaProvider implementation
    # ------------------------------------------------------------------

    async def resolve_by_query(self, query: str) -> EncyclopediaSummary | None:
        """Search *query* and summarize the first hit."""
        q = normalize_query(query)
        if not q:
            return None

        return await self._cached(
            cache_key(_QUERY_CACHE_PREFIX, q),
            lambda: self._lookup_by_query(q),
            query=q,
        )

    async def resolve_by_url(self, url: str) -> EncyclopediaSummary | None:
        """Summarize the page *url* points to."""
        u = normalize_query(url)
        if not u:
            return None

        return await self._cached(
            cache_key(_URL_CACHE_PREFIX, u, lowercase=False),
            lambda: self._lookup_by_url(u),
            url=u,
        )

    def get_provider_name(self) -> str:
        return "wikipedia"

    async def aclose(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._owns_client:
            await self._client.aclose()

    # ------------------------------------------------------------------
    # Lookup steps
    # ------------------------------------------------------------------

    async def _cached(
        self,
        key: str,
        compute: Callable[[], Awaitable[EncyclopediaSummary | None]],
        **log_context: Any,
    ) -> EncyclopediaSummary | None:
        try:
            return await self._cache.get_or_compute(
                key, compute, ttl=self._settings.wikipedia_ttl
            )
        except EncyclopediaLookupError as exc:
            logger.warning("wikipedia_lookup_failed", error=str(exc), **log_context)
            return None

    async def _lookup_by_query(self, query: str) -> EncyclopediaSummary | None:
        title = await self._find_best_title(query)
        if title is None:
            logger.info("wikipedia_no_search_hit", query=query)
            return None
        return await self._fetch_summary(self._base_url, title)

    async def _lookup_by_url(self, url: str) -> EncyclopediaSummary | None:
        parsed = urlparse(url)
        match = _WIKI_PATH.search(parsed.path)
        if match is None or not parsed.netloc:
            logger.info("wikipedia_url_not_parseable", url=url)
            return None

        title = unquote(match.group(1))
        base = f"{parsed.scheme or 'https'}://{parsed.netloc}"
        return await self._fetch_summary(base, title)

    async def _find_best_title(self, query: str) -> str | None:
        """Return the title of the first full-text search hit, if any."""
        data = await self._get_json(
            f"{self._base_url}/w/api.php",
            params={
                "action": "query",
                "list": "search",
                "srsearch": query,
                "format": "json",
                "srlimit": self._settings.wikipedia_search_limit,
            },
            context=f"search for '{query}'",
        )
        if data is None:
            return None

        query_block = data.get("query") or {}
        results = query_block.get("search") if isinstance(query_block, dict) else query_block
        if not results:
            return None
        if not isinstance(results, list) or not isinstance(results[0], dict):
            raise EncyclopediaLookupError(
                message=f"Unexpected search result shape for '{query}'",
                provider_name=self.get_provider_name(),
            )

        title = results[0].get("title")
        return title if isinstance(title, str) and title else None

    async def _fetch_summary(self, base_url: str, title: str) -> EncyclopediaSummary | None:
        """Fetch the REST page summary for *title* from any language edition."""
        path_title = quote(title.replace(" ", "_"), safe="")
        data = await self._get_json(
            f"{base_url}/api/rest_v1/page/summary/{path_title}",
            context=f"summary of '{title}'",
        )
        if data is None:
            logger.info("wikipedia_page_not_found", title=title, base=base_url)
            return None

        try:
            summary = _parse_summary(data, title)
        except (ValidationError, AttributeError, TypeError) as exc:
            raise EncyclopediaLookupError(
                message=f"Unexpected summary shape for '{title}': {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        logger.info(
            "wikipedia_summary_fetched",
            title=summary.title,
            kind=summary.kind,
            has_image=summary.image_url is not None,
        )
        return summary

    async def _get_json(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        *,
        context: str,
    ) -> dict[str, Any] | None:
        """GET *url* as JSON.  ``None`` means HTTP 404 (no such page)."""
        try:
            response = await self._client.get(url, params=params, headers=self._headers)
            if response.status_code == 404:
                return None
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as exc:
            raise EncyclopediaLookupError(
                message=f"HTTP {exc.response.status_code} during {context}",
                provider_name=self.get_provider_name(),
            ) from exc
        except httpx.HTTPError as exc:
            raise EncyclopediaLookupError(
                message=f"Request failed during {context}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        except ValueError as exc:
            raise EncyclopediaLookupError(
                message=f"Malformed JSON during {context}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if not isinstance(data, dict):
            raise EncyclopediaLookupError(
                message=f"Unexpected response shape during {context}",
                provider_name=self.get_provider_name(),
            )
        return data


def _image_source(image: Any) -> str | None:
    if not isinstance(image, dict):
        return None
    source = image.get("source")
    return source if isinstance(source, str) and source else None


def _parse_summary(data: dict[str, Any], title: str) -> EncyclopediaSummary:
    return EncyclopediaSummary(
        title=data.get("title") or title,
        kind=data.get("type"),
        description=data.get("description"),
        long_text=data.get("extract"),
        image_url_thumbnail=_image_source(data.get("thumbnail")),
        image_url_original=_image_source(data.get("originalimage")),
        canonical_url=((data.get("content_urls") or {}).get("desktop") or {}).get("page"),
    )
