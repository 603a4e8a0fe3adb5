"""Custom exception hierarchy for artist enrichment.

All application exceptions inherit from :class:`EnrichmentError`, which
carries an optional ``provider_name`` so log handlers can identify which
external service (e.g. "musicbrainz", "wikipedia") caused the failure.

The hierarchy is organized by pipeline step:

    EnrichmentError  (base -- catch-all for any enrichment error)
    +-- DirectoryLookupError     (step 1: music-metadata directory)
    +-- EncyclopediaLookupError  (step 2: encyclopedia summary)
    +-- ImageDownloadError       (step 3: image transport)
    +-- StorageError             (step 3: writing image bytes)
    +-- ConfigurationError       (startup / missing config)

"Not found" is never an exception -- providers return ``None`` for that.
Only ConfigurationError is meant to reach callers; everything else is
absorbed by the enrichment service and logged.
"""


class EnrichmentError(Exception):
    """Base exception for all enrichment errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which external service triggered the
    error.  ``__str__`` prefixes the provider name in brackets for log
    output, e.g. ``[musicbrainz] HTTP 503 during artist search``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Provider lookup errors
# ---------------------------------------------------------------------------

class DirectoryLookupError(EnrichmentError):
    """Raised when the music-metadata directory cannot be queried or parsed."""

    def __init__(
        self,
        message: str = "Directory lookup failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class EncyclopediaLookupError(EnrichmentError):
    """Raised when an encyclopedia search or summary request fails."""

    def __init__(
        self,
        message: str = "Encyclopedia lookup failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Image errors
# ---------------------------------------------------------------------------

class ImageDownloadError(EnrichmentError):
    """Raised when an image URL cannot be fetched."""

    def __init__(
        self,
        message: str = "Image download failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class StorageError(EnrichmentError):
    """Raised when image bytes cannot be written to the storage location."""

    def __init__(
        self,
        message: str = "Image storage failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------

class ConfigurationError(EnrichmentError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
