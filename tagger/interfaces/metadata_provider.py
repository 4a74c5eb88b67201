"""Abstract base class for track-metadata lookup providers.

Defines the contract for querying an external music-metadata service (e.g.
MusicBrainz) for the label, release date and catalog number of a track.
The enricher depends only on this interface, so providers are
interchangeable and tests can inject fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from tagger.models.track import RateLimitInfo, SearchRequest, TrackMetadata


class IMetadataProvider(ABC):
    """Contract for services that resolve artist/title into release metadata."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return the provider's display name, e.g. ``"MusicBrainz"``."""

    @abstractmethod
    async def lookup(self, artist: str, title: str) -> TrackMetadata:
        """Look up a track by artist and title alone.

        Raises
        ------
        tagger.utils.errors.NotFoundError
            If nothing matched.
        tagger.utils.errors.APIError
            If the remote service could not be reached or answered with an error.
        """

    @abstractmethod
    async def lookup_with_hints(self, request: SearchRequest) -> TrackMetadata:
        """Look up a track using every hint carried by *request*.

        Parameters
        ----------
        request:
            Artist/title plus optional album, genre, year and duration hints,
            the original-release preference and the candidate limit.

        Returns
        -------
        TrackMetadata
            The single best match, with ``confidence`` in [0, 1].

        Raises
        ------
        tagger.utils.errors.NotFoundError
            If no candidate recording or release was found.
        tagger.utils.errors.APIError
            If a remote call failed.
        asyncio.CancelledError
            Propagated unchanged when the calling task is cancelled.
        """

    @abstractmethod
    def supports_genre(self, genre: str) -> bool:
        """Return ``True`` if the provider has useful coverage for *genre*."""

    @abstractmethod
    def get_rate_limit(self) -> RateLimitInfo:
        """Return the rate-limit characteristics this provider observes."""

    @abstractmethod
    async def close(self) -> None:
        """Release connections and other resources.

        Must be idempotent and safe to call on a provider that never made
        a request.
        """
