"""Pydantic v2 models for the MusicBrainz JSON web service (``/ws/2``).

Only the fields the provider reads are declared; everything else in the
response is ignored.  MusicBrainz uses hyphenated keys (``artist-credit``,
``label-info``), which are mapped through field aliases.  Nullable values
(``"label": null``, ``"catalog-number": null``) are common in real payloads
and are modelled as optional.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class MBArtist(BaseModel):
    """An artist entity, as nested inside an artist credit."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = ""
    name: str = ""
    sort_name: str = Field(default="", alias="sort-name")
    disambiguation: str | None = None


class MBArtistCredit(BaseModel):
    """One credited artist on a recording (``name`` is the credited spelling)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = ""
    joinphrase: str | None = None
    artist: MBArtist = Field(default_factory=MBArtist)


class MBLabel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = ""
    name: str = ""
    sort_name: str | None = Field(default=None, alias="sort-name")
    label_code: int | None = Field(default=None, alias="label-code")
    country: str | None = None


class MBLabelInfo(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    catalog_number: str | None = Field(default=None, alias="catalog-number")
    label: MBLabel | None = None


class MBRelease(BaseModel):
    """A specific issued edition (album, single, reissue) of a recording."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = ""
    title: str = ""
    status: str | None = None
    date: str | None = None
    country: str | None = None
    label_info: list[MBLabelInfo] = Field(default_factory=list, alias="label-info")


class MBRecording(BaseModel):
    """A search hit: one recording plus its relevance score (0-100)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: str = ""
    score: int = 0
    length: int | None = None           # milliseconds
    artist_credit: list[MBArtistCredit] = Field(default_factory=list, alias="artist-credit")
    releases: list[MBRelease] = Field(default_factory=list)


class MBRecordingSearchResult(BaseModel):
    """Response body of ``GET /ws/2/recording?query=...``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    count: int = 0
    offset: int = 0
    recordings: list[MBRecording] = Field(default_factory=list)


class MBRecordingDetail(BaseModel):
    """Response body of ``GET /ws/2/recording/{mbid}?inc=releases+labels``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: str = ""
    length: int | None = None
    artist_credit: list[MBArtistCredit] = Field(default_factory=list, alias="artist-credit")
    releases: list[MBRelease] = Field(default_factory=list)
