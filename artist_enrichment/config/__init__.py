"""Configuration module -- exports Settings and load_settings."""

from artist_enrichment.config.loader import load_settings
from artist_enrichment.config.settings import Settings

__all__ = ["Settings", "load_settings"]
