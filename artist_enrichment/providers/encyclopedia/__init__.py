"""Encyclopedia providers.

WikipediaProvider supplies the artist description and lead image, either
from the exact page MusicBrainz links to or through a name search.
"""

from artist_enrichment.providers.encyclopedia.wikipedia_provider import WikipediaProvider

__all__ = ["WikipediaProvider"]
