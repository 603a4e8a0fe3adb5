"""Concrete adapters for the collaborator interfaces.

    - cache/         -- in-memory per-entry-TTL cache
    - music_db/      -- MusicBrainz artist directory
    - encyclopedia/  -- Wikipedia search and page summaries
    - storage/       -- local-disk image store
"""
