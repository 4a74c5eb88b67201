"""MusicBrainz provider implementing IMetadataProvider.

Talks to the MusicBrainz JSON web service (``/ws/2``) over an injected
``httpx.AsyncClient``.  A lookup is two requests: a recording search, then a
recording lookup with its releases and their labels.  Every request is paced
through a :class:`~tagger.utils.rate_limiter.RateLimiter` to respect the
MusicBrainz limit of one request per second, and carries the identifying
``User-Agent`` MusicBrainz requires of all clients.
"""

from __future__ import annotations

from typing import Any

import httpx

from tagger.config.settings import Settings
from tagger.interfaces.metadata_provider import IMetadataProvider
from tagger.models.musicbrainz import (
    MBArtistCredit,
    MBRecording,
    MBRecordingDetail,
    MBRecordingSearchResult,
    MBRelease,
)
from tagger.models.track import RateLimitInfo, SearchRequest, TrackMetadata
from tagger.utils.confidence import calculate_confidence
from tagger.utils.errors import APIError, NotFoundError, RateLimitError
from tagger.utils.logging import get_logger
from tagger.utils.rate_limiter import RateLimiter

_PROVIDER_NAME = "MusicBrainz"
_EXACT_MATCH_BONUS = 10             # added to the search score per exact field
_RATE_LIMITED_STATUSES = (429, 503)


class MusicBrainzProvider(IMetadataProvider):
    """Metadata provider backed by the MusicBrainz web service.

    No API key is required, but clients must identify themselves via a
    user-agent string and stay under one request per second.  The HTTP
    client may be injected (and is then left open by :meth:`close`);
    otherwise the provider creates and owns one.

    Instances are not meant to be shared across event loops.  Within one
    loop, concurrent lookups are paced one request at a time by the rate
    limiter.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
        rate_limiter: RateLimiter | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=self._settings.http_timeout)
        self._rate_limiter = rate_limiter or RateLimiter(self._settings.musicbrainz_min_interval)
        self._base_url = self._settings.musicbrainz_base_url.rstrip("/")
        self._headers = {
            "User-Agent": self._settings.musicbrainz_user_agent(),
            "Accept": "application/json",
        }
        self._closed = False
        self._logger = get_logger(__name__)

        self._logger.info(
            "musicbrainz_provider_initialized",
            user_agent=self._headers["User-Agent"],
            base_url=self._base_url,
        )

    # ------------------------------------------------------------------
    # IMetadataProvider implementation
    # ------------------------------------------------------------------

    def get_provider_name(self) -> str:
        return _PROVIDER_NAME

    async def lookup(self, artist: str, title: str) -> TrackMetadata:
        """Look up *artist* / *title*, preferring the original release."""
        return await self.lookup_with_hints(SearchRequest(artist=artist, title=title))

    async def lookup_with_hints(self, request: SearchRequest) -> TrackMetadata:
        """Search recordings, pick the best one, then pick one of its releases."""
        recordings = await self._search_recordings(request)
        if not recordings:
            raise NotFoundError(
                message=f"No recordings found for '{request.artist} - {request.title}'",
                provider_name=_PROVIDER_NAME,
            )

        recording = self._select_recording(recordings, request.artist, request.title)

        releases = await self._fetch_releases(recording.id)
        if not releases:
            raise NotFoundError(
                message=f"Recording {recording.id} has no releases",
                provider_name=_PROVIDER_NAME,
            )

        release = self._select_release(releases, request.prefer_original_release)
        metadata = self._to_track_metadata(recording, release, request)

        self._logger.debug(
            "musicbrainz_lookup_complete",
            artist=request.artist,
            title=request.title,
            recording_id=recording.id,
            release_id=release.id,
            label=metadata.label,
            confidence=metadata.confidence,
        )
        return metadata

    def supports_genre(self, genre: str) -> bool:
        """MusicBrainz coverage is broad: every genre is considered supported."""
        return True

    def get_rate_limit(self) -> RateLimitInfo:
        return RateLimitInfo(
            requests_per_second=1.0,
            burst_allowed=1,
            requires_user_agent=True,
            requires_api_key=False,
        )

    async def close(self) -> None:
        """Close the HTTP client if this provider created it.  Idempotent."""
        if self._closed:
            return
        self._closed = True
        if self._owns_client:
            await self._http.aclose()
        self._logger.debug("musicbrainz_provider_closed", owned_client=self._owns_client)

    # ------------------------------------------------------------------
    # Remote calls
    # ------------------------------------------------------------------

    async def _search_recordings(self, request: SearchRequest) -> list[MBRecording]:
        """Run the structured recording search for *request*."""
        query = f"artist:{_quote(request.artist)} AND recording:{_quote(request.title)}"
        if request.album:
            query += f" AND release:{_quote(request.album)}"

        payload = await self._get_json(
            "recording",
            {"query": query, "limit": str(request.max_results), "fmt": "json"},
        )
        try:
            result = MBRecordingSearchResult.model_validate(payload)
        except ValueError as exc:
            raise APIError(
                message=f"Unexpected recording search response: {exc}",
                provider_name=_PROVIDER_NAME,
            ) from exc

        self._logger.debug(
            "musicbrainz_recording_search",
            query=query,
            result_count=len(result.recordings),
            total=result.count,
        )
        return result.recordings

    async def _fetch_releases(self, recording_id: str) -> list[MBRelease]:
        """Fetch the releases (with label info) of one recording."""
        payload = await self._get_json(
            f"recording/{recording_id}",
            {"inc": "releases labels", "fmt": "json"},
        )
        try:
            detail = MBRecordingDetail.model_validate(payload)
        except ValueError as exc:
            raise APIError(
                message=f"Unexpected recording lookup response for {recording_id}: {exc}",
                provider_name=_PROVIDER_NAME,
            ) from exc

        self._logger.debug(
            "musicbrainz_recording_releases",
            recording_id=recording_id,
            release_count=len(detail.releases),
        )
        return detail.releases

    async def _get_json(self, path: str, params: dict[str, str]) -> Any:
        """Rate-limited GET against the web service, decoded as JSON."""
        await self._rate_limiter.wait()

        url = f"{self._base_url}/{path}"
        try:
            response = await self._http.get(url, params=params, headers=self._headers)
        except httpx.HTTPError as exc:
            self._logger.warning("musicbrainz_request_failed", url=url, error=str(exc))
            raise APIError(
                message=f"Request to {path} failed: {exc}",
                provider_name=_PROVIDER_NAME,
            ) from exc

        status = response.status_code
        if status in _RATE_LIMITED_STATUSES:
            self._logger.warning("musicbrainz_rate_limited", url=url, status=status)
            raise RateLimitError(
                message=f"MusicBrainz refused {path} with status {status}",
                provider_name=_PROVIDER_NAME,
                status_code=status,
            )
        if status != 200:
            self._logger.warning("musicbrainz_http_error", url=url, status=status)
            raise APIError(
                message=f"MusicBrainz API returned status {status} for {path}",
                provider_name=_PROVIDER_NAME,
                status_code=status,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise APIError(
                message=f"MusicBrainz returned invalid JSON for {path}",
                provider_name=_PROVIDER_NAME,
                status_code=status,
            ) from exc

    # ------------------------------------------------------------------
    # Selection and mapping
    # ------------------------------------------------------------------

    @staticmethod
    def _select_recording(
        recordings: list[MBRecording], artist: str, title: str
    ) -> MBRecording:
        """Pick the recording with the highest adjusted score.

        The adjusted score is the search relevance score plus 10 for an
        exact (case-insensitive) title match and 10 for an exact artist
        match.  Ties keep the earlier candidate.
        """
        best = recordings[0]
        best_score: int | None = None
        for recording in recordings:
            score = recording.score
            if _title_matches(recording.title, title):
                score += _EXACT_MATCH_BONUS
            if _artist_matches(recording.artist_credit, artist):
                score += _EXACT_MATCH_BONUS
            if best_score is None or score > best_score:
                best, best_score = recording, score
        return best

    @staticmethod
    def _select_release(releases: list[MBRelease], prefer_original: bool) -> MBRelease:
        """Pick the earliest-dated release, or simply the first one.

        MusicBrainz dates are ISO strings (``YYYY``, ``YYYY-MM`` or
        ``YYYY-MM-DD``), so the lexicographic minimum is the earliest.
        Undated releases are only chosen when no release carries a date.
        """
        if not prefer_original:
            return releases[0]
        dated = [release for release in releases if release.date]
        if not dated:
            return releases[0]
        return min(dated, key=lambda release: release.date or "")

    @staticmethod
    def _to_track_metadata(
        recording: MBRecording, release: MBRelease, request: SearchRequest
    ) -> TrackMetadata:
        """Map the chosen recording/release pair to a :class:`TrackMetadata`."""
        release_date = release.date or None

        # Extract year from date string (YYYY or YYYY-MM-DD)
        year: int | None = None
        if release_date and len(release_date) >= 4:
            try:
                year = int(release_date[:4])
            except ValueError:
                year = None

        label: str | None = None
        catalog_number: str | None = None
        if release.label_info:
            first = release.label_info[0]
            if first.label is not None and first.label.name:
                label = first.label.name
            catalog_number = first.catalog_number or None

        exact_match = _title_matches(recording.title, request.title) and _artist_matches(
            recording.artist_credit, request.artist
        )
        confidence = calculate_confidence(
            exact_match,
            has_label=label is not None,
            has_release_date=release_date is not None or year is not None,
            has_catalog_number=catalog_number is not None,
        )

        return TrackMetadata(
            artist=request.artist,
            title=request.title,
            album=release.title or None,
            label=label,
            release_date=release_date,
            catalog_number=catalog_number,
            year=year,
            provider_id=recording.id,
            provider_name=_PROVIDER_NAME,
            confidence=confidence,
            extra={
                "musicbrainz_recording_id": recording.id,
                "musicbrainz_release_id": release.id,
                "musicbrainz_score": recording.score,
            },
        )


def _quote(value: str) -> str:
    """Quote a value for the Lucene query syntax used by the search endpoint."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _title_matches(candidate: str, wanted: str) -> bool:
    return candidate.casefold() == wanted.casefold()


def _artist_matches(credits: list[MBArtistCredit], wanted: str) -> bool:
    """True if any credited artist (entity name or credited spelling) equals *wanted*."""
    target = wanted.casefold()
    for credit in credits:
        if credit.artist.name.casefold() == target or credit.name.casefold() == target:
            return True
    return False
