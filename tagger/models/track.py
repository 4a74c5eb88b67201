"""Core lookup models: the enriched track, the search request and the
provider rate-limit descriptor.

All models use frozen config.  A :class:`TrackMetadata` is built once by a
provider and handed back to the caller as-is; the enricher never merges or
edits results.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_MAX_RESULTS = 5


class TrackMetadata(BaseModel):
    """Enriched metadata for one track, as returned by a single provider.

    ``artist`` and ``title`` echo what the caller searched for; everything
    else comes from the provider.  ``extra`` holds provider-specific values
    (e.g. MusicBrainz recording and release MBIDs) under namespaced keys.
    """

    model_config = ConfigDict(frozen=True)

    artist: str
    title: str
    album: str | None = None
    label: str | None = None
    release_date: str | None = None     # ISO date as reported (YYYY, YYYY-MM or YYYY-MM-DD)
    genre: str | None = None
    catalog_number: str | None = None
    year: int | None = None

    provider_id: str = ""               # e.g. the MusicBrainz recording MBID
    provider_name: str = Field(min_length=1)
    confidence: float = 0.0
    extra: dict[str, Any] = Field(default_factory=dict)

    @field_validator("confidence")
    @classmethod
    def _clamp_confidence(cls, value: float) -> float:
        return max(0.0, min(1.0, value))

    @property
    def has_label(self) -> bool:
        return bool(self.label)


class SearchRequest(BaseModel):
    """Parameters for a single provider lookup.

    Only ``artist`` and ``title`` are required.  The remaining fields are
    hints a provider may use to narrow its search.
    """

    model_config = ConfigDict(frozen=True)

    artist: str
    title: str
    album: str | None = None
    genre: str | None = None
    year: str | None = None
    duration: float | None = None       # seconds

    prefer_original_release: bool = True
    max_results: int = Field(default=DEFAULT_MAX_RESULTS, ge=1)

    def simplified(self) -> SearchRequest:
        """Return a copy stripped down to artist, title and the preference flags."""
        return SearchRequest(
            artist=self.artist,
            title=self.title,
            prefer_original_release=self.prefer_original_release,
            max_results=self.max_results,
        )


class RateLimitInfo(BaseModel):
    """Rate-limit characteristics a provider advertises.

    Informational only: the provider paces itself, callers do not enforce it.
    """

    model_config = ConfigDict(frozen=True)

    requests_per_second: float
    burst_allowed: int = 1
    requires_user_agent: bool = False
    requires_api_key: bool = False
