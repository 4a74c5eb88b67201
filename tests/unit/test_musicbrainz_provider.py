"""Unit tests for the MusicBrainz metadata provider."""

from __future__ import annotations

import asyncio
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from tagger.config.settings import Settings
from tagger.models.musicbrainz import MBRelease
from tagger.models.track import SearchRequest
from tagger.providers.metadata.musicbrainz_provider import MusicBrainzProvider
from tagger.utils.errors import APIError, NotFoundError, RateLimitError
from tests.conftest import http_response, recording


def _client(*responses: Any) -> MagicMock:
    """Mock AsyncClient whose successive GETs return (or raise) *responses*."""
    client = MagicMock()
    client.get = AsyncMock(side_effect=list(responses))
    client.aclose = AsyncMock()
    return client


def _limiter() -> MagicMock:
    limiter = MagicMock()
    limiter.wait = AsyncMock(return_value=None)
    return limiter


def _provider(settings: Settings, client: MagicMock, limiter: MagicMock | None = None) -> MusicBrainzProvider:
    return MusicBrainzProvider(settings=settings, http_client=client, rate_limiter=limiter or _limiter())


def _release(release_id: str, date: str | None) -> MBRelease:
    return MBRelease(id=release_id, title=release_id, date=date)


# ======================================================================
# Basic interface
# ======================================================================


class TestMusicBrainzProviderInterface:
    def test_get_provider_name(self, settings: Settings) -> None:
        provider = _provider(settings, _client())
        assert provider.get_provider_name() == "MusicBrainz"

    def test_supports_every_genre(self, settings: Settings) -> None:
        provider = _provider(settings, _client())
        assert provider.supports_genre("jungle") is True
        assert provider.supports_genre("") is True

    def test_rate_limit(self, settings: Settings) -> None:
        info = _provider(settings, _client()).get_rate_limit()
        assert info.requests_per_second == 1.0
        assert info.burst_allowed == 1
        assert info.requires_user_agent is True
        assert info.requires_api_key is False


# ======================================================================
# Lookup pipeline
# ======================================================================


class TestMusicBrainzLookup:
    @pytest.mark.asyncio
    async def test_lookup_maps_original_release(
        self, settings: Settings, search_payload: dict, detail_payload: dict
    ) -> None:
        client = _client(http_response(search_payload), http_response(detail_payload))
        provider = _provider(settings, client)

        result = await provider.lookup("Goldie", "Inner City Life")

        assert result.artist == "Goldie"
        assert result.title == "Inner City Life"
        assert result.label == "FFRR"
        assert result.release_date == "1994-11-14"
        assert result.year == 1994
        assert result.catalog_number == "FCD 242"
        assert result.album == "Inner City Life"
        assert result.provider_name == "MusicBrainz"
        assert result.provider_id == "rec-1"
        assert result.confidence == pytest.approx(1.0)
        assert result.extra["musicbrainz_release_id"] == "rel-1994"
        assert result.extra["musicbrainz_recording_id"] == "rec-1"

    @pytest.mark.asyncio
    async def test_without_original_preference_takes_first_release(
        self, settings: Settings, search_payload: dict, detail_payload: dict
    ) -> None:
        client = _client(http_response(search_payload), http_response(detail_payload))
        provider = _provider(settings, client)

        result = await provider.lookup_with_hints(
            SearchRequest(artist="Goldie", title="Inner City Life", prefer_original_release=False)
        )

        assert result.label == "Universal"
        assert result.year == 2008

    @pytest.mark.asyncio
    async def test_request_shape(
        self, settings: Settings, search_payload: dict, detail_payload: dict
    ) -> None:
        client = _client(http_response(search_payload), http_response(detail_payload))
        provider = _provider(settings, client)

        await provider.lookup_with_hints(
            SearchRequest(artist="Goldie", title="Inner City Life", album="Timeless", max_results=3)
        )

        search_call, detail_call = client.get.await_args_list
        assert search_call.args[0] == "https://musicbrainz.org/ws/2/recording"
        params = search_call.kwargs["params"]
        assert params["query"] == (
            'artist:"Goldie" AND recording:"Inner City Life" AND release:"Timeless"'
        )
        assert params["limit"] == "3"
        assert params["fmt"] == "json"

        headers = search_call.kwargs["headers"]
        assert headers["User-Agent"] == "tagger-test/0.1.0 ( test@example.com )"
        assert headers["Accept"] == "application/json"

        assert detail_call.args[0] == "https://musicbrainz.org/ws/2/recording/rec-1"
        assert detail_call.kwargs["params"]["inc"] == "releases labels"

    @pytest.mark.asyncio
    async def test_query_quotes_special_characters(
        self, settings: Settings, search_payload: dict, detail_payload: dict
    ) -> None:
        client = _client(http_response(search_payload), http_response(detail_payload))
        provider = _provider(settings, client)

        await provider.lookup('Say "Hi"', "Inner City Life")

        query = client.get.await_args_list[0].kwargs["params"]["query"]
        assert query.startswith('artist:"Say \\"Hi\\"" AND')

    @pytest.mark.asyncio
    async def test_every_request_is_rate_limited(
        self, settings: Settings, search_payload: dict, detail_payload: dict
    ) -> None:
        limiter = _limiter()
        client = _client(http_response(search_payload), http_response(detail_payload))
        provider = _provider(settings, client, limiter)

        await provider.lookup("Goldie", "Inner City Life")

        assert limiter.wait.await_count == 2

    @pytest.mark.asyncio
    async def test_no_recordings_raises_not_found(self, settings: Settings) -> None:
        client = _client(http_response({"count": 0, "offset": 0, "recordings": []}))
        provider = _provider(settings, client)

        with pytest.raises(NotFoundError) as exc_info:
            await provider.lookup("Nobody", "Nothing")

        assert exc_info.value.provider_name == "MusicBrainz"
        assert client.get.await_count == 1

    @pytest.mark.asyncio
    async def test_no_releases_raises_not_found(
        self, settings: Settings, search_payload: dict
    ) -> None:
        client = _client(
            http_response(search_payload),
            http_response({"id": "rec-1", "title": "Inner City Life", "releases": []}),
        )
        provider = _provider(settings, client)

        with pytest.raises(NotFoundError, match="no releases"):
            await provider.lookup("Goldie", "Inner City Life")

    @pytest.mark.asyncio
    async def test_fuzzy_match_without_label_scores_lower(self, settings: Settings) -> None:
        search = {"count": 1, "recordings": [recording("rec-9", "Inner City Life (Remix)", "Goldie")]}
        detail = {"id": "rec-9", "releases": [{"id": "rel-9", "title": "Remixes", "date": "1995"}]}
        client = _client(http_response(search), http_response(detail))
        provider = _provider(settings, client)

        result = await provider.lookup("Goldie", "Inner City Life")

        assert result.label is None
        assert result.year == 1995
        assert result.confidence == pytest.approx(0.5)


# ======================================================================
# Candidate selection
# ======================================================================


class TestSelection:
    def test_exact_match_bonus_outranks_higher_score(self) -> None:
        from tagger.models.musicbrainz import MBRecording

        candidates = [
            MBRecording.model_validate(recording("r50", "Other", "Someone", score=50)),
            MBRecording.model_validate(recording("r80", "Timeless", "Goldie", score=80)),
            MBRecording.model_validate(recording("r90", "Timeless (Edit)", "Goldie Presents", score=90)),
        ]

        chosen = MusicBrainzProvider._select_recording(candidates, "goldie", "TIMELESS")

        assert chosen.id == "r80"

    def test_tie_keeps_first_candidate(self) -> None:
        from tagger.models.musicbrainz import MBRecording

        candidates = [
            MBRecording.model_validate(recording("a", "X", "Y", score=70)),
            MBRecording.model_validate(recording("b", "X", "Y", score=70)),
        ]

        assert MusicBrainzProvider._select_recording(candidates, "Y", "X").id == "a"

    def test_zero_score_candidates_still_selected(self) -> None:
        from tagger.models.musicbrainz import MBRecording

        candidates = [MBRecording.model_validate(recording("z", "Q", "R", score=0))]
        assert MusicBrainzProvider._select_recording(candidates, "A", "B").id == "z"

    def test_earliest_release_preferred(self) -> None:
        releases = [_release("r2010", "2010"), _release("r1993", "1993-04"), _release("r2000", "2000-01-01")]
        assert MusicBrainzProvider._select_release(releases, True).id == "r1993"

    def test_undated_releases_skipped_when_dated_exist(self) -> None:
        releases = [_release("undated", None), _release("r2001", "2001")]
        assert MusicBrainzProvider._select_release(releases, True).id == "r2001"

    def test_no_dates_falls_back_to_first(self) -> None:
        releases = [_release("first", None), _release("second", "")]
        assert MusicBrainzProvider._select_release(releases, True).id == "first"

    def test_without_preference_takes_first(self) -> None:
        releases = [_release("r2010", "2010"), _release("r1993", "1993")]
        assert MusicBrainzProvider._select_release(releases, False).id == "r2010"


# ======================================================================
# Failure handling
# ======================================================================


class TestMusicBrainzErrors:
    @pytest.mark.asyncio
    async def test_transport_error_becomes_api_error(self, settings: Settings) -> None:
        cause = httpx.ConnectError("connection refused")
        provider = _provider(settings, _client(cause))

        with pytest.raises(APIError) as exc_info:
            await provider.lookup("Goldie", "Inner City Life")

        assert exc_info.value.__cause__ is cause
        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_server_error_carries_status(self, settings: Settings) -> None:
        provider = _provider(settings, _client(http_response({}, status_code=500)))

        with pytest.raises(APIError) as exc_info:
            await provider.lookup("Goldie", "Inner City Life")

        assert exc_info.value.status_code == 500
        assert not isinstance(exc_info.value, RateLimitError)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [429, 503])
    async def test_throttled_status_is_rate_limit_error(self, settings: Settings, status: int) -> None:
        provider = _provider(settings, _client(http_response({}, status_code=status)))

        with pytest.raises(RateLimitError) as exc_info:
            await provider.lookup("Goldie", "Inner City Life")

        assert exc_info.value.status_code == status

    @pytest.mark.asyncio
    async def test_invalid_json_is_api_error(self, settings: Settings) -> None:
        response = http_response()
        response.json.side_effect = ValueError("Expecting value")
        provider = _provider(settings, _client(response))

        with pytest.raises(APIError, match="invalid JSON"):
            await provider.lookup("Goldie", "Inner City Life")

    @pytest.mark.asyncio
    async def test_malformed_payload_is_api_error(self, settings: Settings) -> None:
        payload = {"recordings": [{"title": "missing id"}]}
        provider = _provider(settings, _client(http_response(payload)))

        with pytest.raises(APIError):
            await provider.lookup("Goldie", "Inner City Life")

    @pytest.mark.asyncio
    async def test_cancellation_during_rate_limit_propagates(self, settings: Settings) -> None:
        limiter = MagicMock()
        limiter.wait = AsyncMock(side_effect=asyncio.CancelledError())
        client = _client()
        provider = _provider(settings, client, limiter)

        with pytest.raises(asyncio.CancelledError):
            await provider.lookup("Goldie", "Inner City Life")

        client.get.assert_not_awaited()


# ======================================================================
# Resource ownership
# ======================================================================


class TestMusicBrainzClose:
    @pytest.mark.asyncio
    async def test_injected_client_left_open(self, settings: Settings) -> None:
        client = _client()
        provider = _provider(settings, client)

        await provider.close()
        await provider.close()

        client.aclose.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_owned_client_closed_once(self, settings: Settings) -> None:
        provider = MusicBrainzProvider(settings=settings)
        owned = provider._http

        await provider.close()
        await provider.close()

        assert owned.is_closed is True

    def test_user_agent_without_contact(self) -> None:
        agent = Settings(musicbrainz_app_name="app", musicbrainz_app_version="2.0").musicbrainz_user_agent()
        assert agent == "app/2.0"
