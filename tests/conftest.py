"""Shared pytest fixtures for the tagger test suite."""

from __future__ import annotations

from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from tagger.config.settings import Settings
from tagger.interfaces.metadata_provider import IMetadataProvider
from tagger.models.track import RateLimitInfo, TrackMetadata


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture
def settings() -> Settings:
    """Settings with a contact address and no pacing between requests."""
    return Settings(
        musicbrainz_app_name="tagger-test",
        musicbrainz_app_version="0.1.0",
        musicbrainz_contact="test@example.com",
        musicbrainz_min_interval=0.0,
    )


# ---------------------------------------------------------------------------
# Track metadata and mock providers
# ---------------------------------------------------------------------------


def make_track(**overrides: Any) -> TrackMetadata:
    """Build a TrackMetadata with sensible defaults for orchestration tests."""
    defaults: dict[str, Any] = {
        "artist": "Goldie",
        "title": "Inner City Life",
        "album": "Timeless",
        "label": "FFRR",
        "release_date": "1994-11-14",
        "year": 1994,
        "catalog_number": "FCD 242",
        "provider_id": "rec-1",
        "provider_name": "mock",
        "confidence": 0.9,
    }
    defaults.update(overrides)
    return TrackMetadata(**defaults)


@pytest.fixture
def track_factory() -> Callable[..., TrackMetadata]:
    return make_track


def make_provider(
    name: str = "mock",
    result: TrackMetadata | None = None,
    error: BaseException | None = None,
) -> MagicMock:
    """Mock IMetadataProvider whose lookup_with_hints returns *result* or raises *error*."""
    mock = MagicMock(spec=IMetadataProvider)
    mock.get_provider_name.return_value = name
    mock.supports_genre.return_value = True
    mock.get_rate_limit.return_value = RateLimitInfo(requests_per_second=1.0)
    if error is not None:
        mock.lookup_with_hints = AsyncMock(side_effect=error)
    else:
        mock.lookup_with_hints = AsyncMock(return_value=result)
    mock.lookup = AsyncMock(return_value=result)
    mock.close = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def provider_factory() -> Callable[..., MagicMock]:
    return make_provider


# ---------------------------------------------------------------------------
# MusicBrainz payloads
# ---------------------------------------------------------------------------


def recording(
    rec_id: str,
    title: str,
    artist: str,
    score: int = 100,
) -> dict[str, Any]:
    """One entry of a recording search response."""
    return {
        "id": rec_id,
        "title": title,
        "score": score,
        "length": 361000,
        "artist-credit": [
            {
                "name": artist,
                "joinphrase": "",
                "artist": {"id": f"artist-{rec_id}", "name": artist, "sort-name": artist},
            }
        ],
    }


@pytest.fixture
def search_payload() -> dict[str, Any]:
    """Recording search response with a single exact hit."""
    return {
        "created": "2024-01-01T00:00:00.000Z",
        "count": 1,
        "offset": 0,
        "recordings": [recording("rec-1", "Inner City Life", "Goldie", score=100)],
    }


@pytest.fixture
def detail_payload() -> dict[str, Any]:
    """Recording lookup response with a reissue listed before the original."""
    return {
        "id": "rec-1",
        "title": "Inner City Life",
        "artist-credit": [
            {"name": "Goldie", "artist": {"id": "artist-1", "name": "Goldie", "sort-name": "Goldie"}}
        ],
        "releases": [
            {
                "id": "rel-2008",
                "title": "Timeless (Deluxe)",
                "date": "2008-09-22",
                "country": "GB",
                "label-info": [
                    {"catalog-number": "5310162", "label": {"id": "lab-2", "name": "Universal"}}
                ],
            },
            {
                "id": "rel-1994",
                "title": "Inner City Life",
                "date": "1994-11-14",
                "country": "GB",
                "label-info": [
                    {"catalog-number": "FCD 242", "label": {"id": "lab-1", "name": "FFRR"}}
                ],
            },
        ],
    }


def http_response(payload: Any = None, status_code: int = 200) -> MagicMock:
    """Mock httpx.Response carrying *payload* as its JSON body."""
    response = MagicMock()
    response.status_code = status_code
    response.json = MagicMock(return_value=payload)
    return response
