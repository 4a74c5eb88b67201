"""Multi-provider metadata enrichment.

Resolves an artist/title pair into label, release-date and catalog data by
consulting every registered :class:`IMetadataProvider` under one of three
strategies:

  FIRST    -- providers in registration order; the first qualifying result
             wins and the remaining providers are never called.
  BEST     -- every provider is called; the highest-confidence qualifying
             result wins (the earlier provider on ties).
  FALLBACK -- FIRST with the full request; if that fails, FIRST again with
             only artist, title and the preference flags.

A result *qualifies* when its confidence reaches ``min_confidence`` and,
with ``require_label`` set, it carries a label.

Providers are called strictly one after another, so BEST costs the sum of
all provider latencies.  The whole lookup runs under ``request_timeout``;
when it expires (or the calling task is cancelled) the asyncio error
propagates unchanged.  Provider failures are logged and skipped; the last
one is re-raised if no provider produced a qualifying result.  Nothing is
retried and nothing is cached.
"""

from __future__ import annotations

import asyncio

import structlog

from tagger.interfaces.metadata_provider import IMetadataProvider
from tagger.models.enrichment import EnricherConfig, ProviderStrategy
from tagger.models.track import DEFAULT_MAX_RESULTS, SearchRequest, TrackMetadata
from tagger.utils.errors import NoProviderError, NotFoundError
from tagger.utils.logging import get_logger


class MetadataEnricher:
    """Orchestrates an ordered list of metadata providers.

    Parameters
    ----------
    providers:
        Providers in priority order.  More can be appended later with
        :meth:`add_provider`.
    config:
        Strategy, quality gates and timeout.  Defaults to FIRST with
        ``min_confidence=0.7`` and a 30 second timeout.
    """

    def __init__(
        self,
        providers: list[IMetadataProvider] | None = None,
        config: EnricherConfig | None = None,
    ) -> None:
        self._providers: list[IMetadataProvider] = list(providers or [])
        self._config = config or EnricherConfig()
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # -- Registry ---------------------------------------------------------------

    @property
    def config(self) -> EnricherConfig:
        return self._config

    @property
    def providers(self) -> tuple[IMetadataProvider, ...]:
        return tuple(self._providers)

    def add_provider(self, provider: IMetadataProvider) -> None:
        """Append *provider* to the end of the priority order."""
        self._providers.append(provider)

    async def close(self) -> None:
        """Close every provider.

        All providers are closed even if one fails; the last failure is
        re-raised afterwards.
        """
        last_error: Exception | None = None
        for provider in self._providers:
            try:
                await provider.close()
            except Exception as exc:
                self._logger.warning(
                    "Provider close failed",
                    provider=provider.get_provider_name(),
                    error=str(exc),
                )
                last_error = exc
        if last_error is not None:
            raise last_error

    # -- Public API -------------------------------------------------------------

    async def lookup(self, artist: str, title: str) -> TrackMetadata:
        """Look up *artist* / *title*, preferring original releases."""
        if not self._providers:
            raise NoProviderError()

        request = SearchRequest(
            artist=artist,
            title=title,
            prefer_original_release=True,
            max_results=DEFAULT_MAX_RESULTS,
        )
        return await self.lookup_with_request(request)

    async def lookup_with_request(self, request: SearchRequest) -> TrackMetadata:
        """Look up *request* under the configured strategy and timeout.

        Raises
        ------
        NoProviderError
            No providers are registered.
        NotFoundError
            No provider produced a qualifying result and none failed.
        TaggerError
            The last provider failure, when no provider produced a
            qualifying result.
        asyncio.TimeoutError
            ``request_timeout`` elapsed.
        """
        if not self._providers:
            raise NoProviderError()

        self._logger.debug(
            "Starting metadata lookup",
            artist=request.artist,
            title=request.title,
            strategy=self._config.strategy.value,
            providers=len(self._providers),
        )
        return await asyncio.wait_for(
            self._dispatch(request),
            timeout=self._config.request_timeout,
        )

    # -- Strategies -------------------------------------------------------------

    async def _dispatch(self, request: SearchRequest) -> TrackMetadata:
        strategy = self._config.strategy
        if strategy is ProviderStrategy.BEST:
            return await self._lookup_best(request)
        if strategy is ProviderStrategy.FALLBACK:
            return await self._lookup_fallback(request)
        return await self._lookup_first(request)

    async def _lookup_first(self, request: SearchRequest) -> TrackMetadata:
        """Return the first qualifying result in provider order."""
        last_error: Exception | None = None

        for provider in self._providers:
            name = provider.get_provider_name()
            try:
                result = await provider.lookup_with_hints(request)
            except Exception as exc:
                self._logger.warning(
                    "Provider lookup failed, trying next provider",
                    provider=name,
                    error=str(exc),
                )
                last_error = exc
                continue

            if self._qualifies(result):
                self._logger.info(
                    "Metadata found",
                    provider=name,
                    artist=request.artist,
                    title=request.title,
                    label=result.label,
                    confidence=result.confidence,
                )
                return result

            self._log_rejected(name, result)

        if last_error is not None:
            raise last_error
        raise NotFoundError(f"No provider found metadata for '{request.artist} - {request.title}'")

    async def _lookup_best(self, request: SearchRequest) -> TrackMetadata:
        """Ask every provider and return the highest-confidence qualifying result."""
        best: TrackMetadata | None = None
        last_error: Exception | None = None

        for provider in self._providers:
            name = provider.get_provider_name()
            try:
                result = await provider.lookup_with_hints(request)
            except Exception as exc:
                self._logger.warning(
                    "Provider lookup failed, continuing",
                    provider=name,
                    error=str(exc),
                )
                last_error = exc
                continue

            if not self._qualifies(result):
                self._log_rejected(name, result)
                continue

            # Strictly greater: on a tie the earlier provider keeps its place.
            if best is None or result.confidence > best.confidence:
                best = result

        if best is not None:
            self._logger.info(
                "Best metadata selected",
                provider=best.provider_name,
                artist=request.artist,
                title=request.title,
                label=best.label,
                confidence=best.confidence,
            )
            return best

        if last_error is not None:
            raise last_error
        raise NotFoundError(f"No provider found metadata for '{request.artist} - {request.title}'")

    async def _lookup_fallback(self, request: SearchRequest) -> TrackMetadata:
        """FIRST with all hints, then FIRST with artist/title only."""
        try:
            return await self._lookup_first(request)
        except Exception as exc:
            self._logger.info(
                "Full-hint lookup failed, retrying with artist and title only",
                artist=request.artist,
                title=request.title,
                error=str(exc),
            )

        return await self._lookup_first(request.simplified())

    # -- Helpers ----------------------------------------------------------------

    def _qualifies(self, result: TrackMetadata | None) -> bool:
        if result is None:
            return False
        if result.confidence < self._config.min_confidence:
            return False
        return not self._config.require_label or result.has_label

    def _log_rejected(self, provider_name: str, result: TrackMetadata | None) -> None:
        self._logger.debug(
            "Result below quality gate",
            provider=provider_name,
            confidence=result.confidence if result is not None else None,
            has_label=result.has_label if result is not None else False,
            min_confidence=self._config.min_confidence,
            require_label=self._config.require_label,
        )
