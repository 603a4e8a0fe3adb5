"""Artist enrichment wiring.

Builds the provider graph from :class:`Settings` and hands back an
:class:`EnrichmentComponents` bundle that owns the HTTP clients.  Callers
(the CLI, or a web app's startup hook) keep the bundle for the process
lifetime and close it on shutdown::

    components = build_enrichment_service(load_settings())
    try:
        await components.service.enrich(record)
    finally:
        await components.aclose()
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx
import structlog

from artist_enrichment.config.settings import Settings
from artist_enrichment.providers.cache.memory_cache import MemoryCacheProvider
from artist_enrichment.providers.encyclopedia.wikipedia_provider import WikipediaProvider
from artist_enrichment.providers.music_db.musicbrainz_provider import (
    MusicBrainzProvider,
    build_musicbrainz_client,
)
from artist_enrichment.providers.storage.local_image_store import LocalImageStore
from artist_enrichment.services.enrichment_service import ArtistEnrichmentService
from artist_enrichment.services.image_fetcher import ImageFetcher
from artist_enrichment.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)


@dataclass
class EnrichmentComponents:
    """The assembled service plus the resources it depends on."""

    service: ArtistEnrichmentService
    directory: MusicBrainzProvider
    encyclopedia: WikipediaProvider
    image_fetcher: ImageFetcher
    cache: MemoryCacheProvider
    musicbrainz_client: httpx.AsyncClient
    http_client: httpx.AsyncClient

    async def aclose(self) -> None:
        """Close both HTTP clients."""
        await self.musicbrainz_client.aclose()
        await self.http_client.aclose()

    async def __aenter__(self) -> EnrichmentComponents:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def build_enrichment_service(settings: Settings) -> EnrichmentComponents:
    """Construct every provider and the enrichment service.

    Raises:
        ConfigurationError: If ``settings.public_dir`` is empty.
    """
    # -- Storage first: a misconfigured public dir fails before any client opens --
    image_store = LocalImageStore(settings.public_dir, settings.image_dir)

    # -- Shared resources --
    # MusicBrainz gets its own client because of the IPv4-only transport.
    musicbrainz_client = build_musicbrainz_client(settings)
    http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout),
        follow_redirects=True,
    )
    cache = MemoryCacheProvider(max_size=settings.cache_max_size)

    # -- Providers --
    directory = MusicBrainzProvider(settings=settings, cache=cache, http_client=musicbrainz_client)
    encyclopedia = WikipediaProvider(settings=settings, cache=cache, http_client=http_client)
    image_fetcher = ImageFetcher(
        http_client=http_client,
        image_store=image_store,
        user_agent=settings.user_agent,
    )

    # -- Service --
    service = ArtistEnrichmentService(
        directory=directory,
        encyclopedia=encyclopedia,
        image_fetcher=image_fetcher,
        description_max_length=settings.description_max_length,
    )

    _logger.info(
        "enrichment_service_built",
        user_agent=settings.user_agent,
        musicbrainz_ipv4=settings.musicbrainz_force_ipv4,
        wikipedia_base_url=settings.wikipedia_base_url,
        image_dir=str(image_store.target_dir),
    )

    return EnrichmentComponents(
        service=service,
        directory=directory,
        encyclopedia=encyclopedia,
        image_fetcher=image_fetcher,
        cache=cache,
        musicbrainz_client=musicbrainz_client,
        http_client=http_client,
    )
