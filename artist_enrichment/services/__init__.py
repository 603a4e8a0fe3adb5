"""Enrichment services: the orchestrating service and the image fetcher."""

from artist_enrichment.services.enrichment_service import ArtistEnrichmentService
from artist_enrichment.services.image_fetcher import ImageFetcher

__all__ = ["ArtistEnrichmentService", "ImageFetcher"]
