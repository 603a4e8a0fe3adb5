"""Best-effort artist enrichment from MusicBrainz and Wikipedia."""

__version__ = "1.0.0"
