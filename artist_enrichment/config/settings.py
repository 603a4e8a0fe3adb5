"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ────────────────────────────────────────────────
#
# This class uses pydantic-settings to read configuration from TWO
# sources (in priority order):
#
#   1. **Environment variables** -- e.g. MUSICBRAINZ_CONTACT=ops@example.org
#   2. **.env file** -- key=value lines in the project root .env file
#
# The mapping is automatic: field name `musicbrainz_contact` maps to the
# env var `MUSICBRAINZ_CONTACT`.
#
# config/loader.py adds a third, lower-priority layer on top of the
# defaults below: config/config.yaml.
# ──────────────────────────────────────────────────────────────────────
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Artist enrichment settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Client identification ===
    # Both providers ask for a descriptive User-Agent with contact details.
    app_name: str = "KohlkopfConcertApp"
    app_version: str = "1.0"
    contact: str = "kohlkopf@example.com"

    # === MusicBrainz (metadata directory) ===
    musicbrainz_base_url: str = "https://musicbrainz.org/ws/2"
    musicbrainz_force_ipv4: bool = True  # IPv6 to musicbrainz.org fails TLS on some networks
    musicbrainz_search_limit: int = 5
    musicbrainz_min_interval: float = 1.1  # seconds between search and detail request
    # Policy constant, not a derived value: a band may score up to this many
    # points below the top hit and still be preferred over it.
    musicbrainz_group_score_margin: int = 20
    musicbrainz_max_genres: int = 5
    musicbrainz_hit_ttl: int = 604800  # 7 days
    musicbrainz_miss_ttl: int = 3600  # 1 hour

    # === Wikipedia (encyclopedia) ===
    wikipedia_base_url: str = "https://de.wikipedia.org"
    # Language editions preferred when MusicBrainz links several.
    wikipedia_languages: list[str] = ["de", "en"]
    wikipedia_search_limit: int = 5
    wikipedia_ttl: int = 604800  # 7 days, hits and misses alike

    # === Images ===
    public_dir: str = "./public"
    image_dir: str = "images/artists"

    # === Enrichment policy ===
    description_max_length: int = 500

    # === HTTP / cache ===
    http_timeout: float = 15.0
    cache_max_size: int = 2048

    # === App Config ===
    app_env: str = "development"
    log_level: str = "INFO"

    @property
    def user_agent(self) -> str:
        """User-Agent sent to every provider, e.g. ``App/1.0 (contact: x@y)``."""
        return f"{self.app_name}/{self.app_version} (contact: {self.contact})"
