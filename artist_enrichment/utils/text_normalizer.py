"""Text helpers for artist names, cache keys, filenames and descriptions.

Four small concerns live here because every provider and service needs at
least one of them:

1. **Query normalization** -- user-entered names are trimmed before any
   lookup; an empty result means "do not call the provider at all".

2. **Cache keys** -- provider caches are keyed by a SHA-1 of the
   lower-cased name (or of the exact URL), prefixed per provider so the
   two clients can share a single cache backend without collisions.

3. **Filename slugs** -- stored images are named after the artist, reduced
   to ``[a-z0-9-]`` and capped at 50 characters.

4. **Description truncation** -- encyclopedia extracts are cut to a fixed
   length with a single ellipsis marker.
"""

import hashlib
import re

ELLIPSIS = "..."
DEFAULT_DESCRIPTION_MAX_LENGTH = 500
SLUG_MAX_LENGTH = 50

_NON_ALNUM = re.compile(r"[^a-z0-9]+", re.IGNORECASE)


def normalize_query(query: str | None) -> str:
    """Trim a free-text query.  ``None`` normalizes to the empty string."""
    return (query or "").strip()


def cache_key(prefix: str, value: str, lowercase: bool = True) -> str:
    """Build a provider cache key from a prefix and a hashed value.

    Args:
        prefix: Provider namespace, e.g. ``"mb_artist_"``.
        value: The already-normalized query or URL.
        lowercase: Lower-case *value* before hashing.  Name lookups are
                   case-insensitive; URL lookups are not.

    Returns:
        ``prefix`` followed by the hex SHA-1 digest.
    """
    material = value.lower() if lowercase else value
    return prefix + hashlib.sha1(material.encode("utf-8")).hexdigest()


def slugify(name: str, max_length: int = SLUG_MAX_LENGTH) -> str:
    """Reduce *name* to a lower-case, hyphen-separated ASCII slug.

    "Die Ärzte (Live!)" -> "die-rzte-live"
    """
    slug = _NON_ALNUM.sub("-", name).lower().strip("-")
    return slug[:max_length]


def truncate_description(
    text: str,
    max_length: int = DEFAULT_DESCRIPTION_MAX_LENGTH,
) -> str:
    """Cut *text* to at most *max_length* characters.

    Text longer than the limit keeps its first ``max_length - 3`` characters
    followed by the "..." marker, so the result is exactly *max_length*
    characters long.
    """
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + ELLIPSIS
