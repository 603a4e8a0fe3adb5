"""Test helpers shared by unit and integration tests: settings, clocks, HTTP fakes."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock

import httpx

from artist_enrichment.config.settings import Settings

# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


def make_settings(**overrides: Any) -> Settings:
    """Build a Settings instance with test defaults (no .env influence)."""
    defaults: dict[str, Any] = {
        "app_name": "EnrichmentTest",
        "app_version": "0.1",
        "contact": "test@example.com",
        "musicbrainz_min_interval": 0.0,
        "public_dir": "./public-test",
    }
    defaults.update(overrides)
    return Settings(_env_file=None, **defaults)


# ---------------------------------------------------------------------------
# Time
# ---------------------------------------------------------------------------


class FakeClock:
    """Manually advanced clock usable as ``timer``/``clock`` argument."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ---------------------------------------------------------------------------
# HTTP fakes
# ---------------------------------------------------------------------------


def make_response(
    status_code: int = 200,
    json_data: Any = None,
    content: bytes | None = None,
    headers: dict[str, str] | None = None,
    url: str = "https://example.test/",
) -> httpx.Response:
    """Build a real httpx.Response bound to a request (so raise_for_status works)."""
    request = httpx.Request("GET", url)
    if json_data is not None:
        return httpx.Response(status_code, json=json_data, headers=headers, request=request)
    return httpx.Response(status_code, content=content or b"", headers=headers, request=request)


Route = httpx.Response | Exception | Callable[[str, dict[str, Any]], httpx.Response]


def route_client(routes: dict[str, Route]) -> AsyncMock:
    """An AsyncMock client whose ``get`` dispatches on URL substrings.

    Keys are matched against the requested URL in insertion order; the
    first key contained in the URL wins.  Values are a response, an
    exception to raise, or a callable ``(url, params) -> response``.
    Unmatched URLs answer 404.
    """

    async def _get(url: str, params: dict[str, Any] | None = None, **_: Any) -> httpx.Response:
        for fragment, result in routes.items():
            if fragment in url:
                if isinstance(result, Exception):
                    raise result
                if callable(result):
                    return result(url, params or {})
                return result
        return make_response(404, url=url)

    client = AsyncMock(spec=httpx.AsyncClient)
    client.get = AsyncMock(side_effect=_get)
    return client


def requested_urls(client: AsyncMock) -> list[str]:
    """URLs passed to ``client.get`` so far, in call order."""
    return [c.args[0] for c in client.get.call_args_list]


# ---------------------------------------------------------------------------
# Canned provider payloads
# ---------------------------------------------------------------------------

BUTTERWEGGE_GROUP_ID = "4f2a9c1e-7b3d-4e8a-9a60-1c2d3e4f5a6b"
BUTTERWEGGE_PERSON_ID = "9b8a7c6d-0000-4000-8000-123456789abc"


def musicbrainz_search_payload(*artists: tuple[str, int, str | None]) -> dict[str, Any]:
    """``(id, score, type)`` tuples to a MusicBrainz search response."""
    return {
        "artists": [
            {"id": mbid, "score": score, "type": kind, "name": f"Artist {mbid[:4]}"}
            for mbid, score, kind in artists
        ]
    }


def butterwegge_detail_payload() -> dict[str, Any]:
    return {
        "id": BUTTERWEGGE_GROUP_ID,
        "name": "Butterwegge",
        "type": "Group",
        "disambiguation": "German punk band",
        "genres": [
            {"name": "Indie", "count": 1},
            {"name": "Punk", "count": 3},
        ],
        "tags": [{"name": "deutschpunk", "count": 7}],
        "relations": [
            {
                "type": "wikipedia",
                "url": {"resource": "https://en.wikipedia.org/wiki/Butterwegge_(band)"},
            },
            {
                "type": "wikipedia",
                "url": {"resource": "https://de.wikipedia.org/wiki/Butterwegge_(Band)"},
            },
            {"type": "official homepage", "url": {"resource": "https://butterwegge.de"}},
        ],
    }


def wikipedia_summary_payload(
    title: str = "Butterwegge (Band)",
    extract: str = "Butterwegge ist eine deutsche Punkband aus Hagen.",
    thumbnail: str | None = "https://upload.wikimedia.org/thumb/butterwegge.jpg",
    original: str | None = "https://upload.wikimedia.org/butterwegge.jpg",
    page_type: str = "standard",
    page_url: str = "https://de.wikipedia.org/wiki/Butterwegge_(Band)",
) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "type": page_type,
        "title": title,
        "description": "deutsche Punkband",
        "extract": extract,
        "content_urls": {"desktop": {"page": page_url}},
    }
    if thumbnail:
        payload["thumbnail"] = {"source": thumbnail, "width": 320, "height": 213}
    if original:
        payload["originalimage"] = {"source": original, "width": 1200, "height": 800}
    return payload
