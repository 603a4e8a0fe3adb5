"""Utility modules for artist enrichment.

Available utility modules (all re-exported here for convenience):

- **errors** -- Exception hierarchy rooted at EnrichmentError; each pipeline
  step raises its own subclass and the enrichment service absorbs them.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
- **rate_limiter** -- Minimum-interval gate for providers that throttle
  clients (MusicBrainz allows roughly one request per second).
- **text_normalizer** -- Query normalization, cache keys, filename slugs
  and description truncation.
"""

# -- Domain exception hierarchy --------------------------------------------
from artist_enrichment.utils.errors import (
    ConfigurationError,
    DirectoryLookupError,
    EncyclopediaLookupError,
    EnrichmentError,
    ImageDownloadError,
    StorageError,
)

# -- Structured logging setup ----------------------------------------------
from artist_enrichment.utils.logging import configure_logging, get_logger

# -- Provider throttling ---------------------------------------------------
from artist_enrichment.utils.rate_limiter import RateLimitedCaller

# -- Text helpers ----------------------------------------------------------
from artist_enrichment.utils.text_normalizer import (
    cache_key,
    normalize_query,
    slugify,
    truncate_description,
)

__all__ = [
    "ConfigurationError",
    "DirectoryLookupError",
    "EncyclopediaLookupError",
    "EnrichmentError",
    "ImageDownloadError",
    "RateLimitedCaller",
    "StorageError",
    "cache_key",
    "configure_logging",
    "get_logger",
    "normalize_query",
    "slugify",
    "truncate_description",
]
