"""Enricher configuration models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ProviderStrategy(str, Enum):  # noqa: UP042 -- StrEnum requires Python 3.11+
    """How the enricher consults its providers.

    FIRST:    first qualifying result in registration order wins
    BEST:     every provider is asked, highest confidence wins
    FALLBACK: FIRST with all hints, then FIRST again with artist/title only
    """

    FIRST = "first"
    BEST = "best"
    FALLBACK = "fallback"


class EnricherConfig(BaseModel):
    """Quality gates and timing for :class:`~tagger.services.enricher.MetadataEnricher`."""

    model_config = ConfigDict(frozen=True)

    strategy: ProviderStrategy = ProviderStrategy.FIRST
    min_confidence: float = Field(default=0.7, ge=0.0, le=1.0)
    require_label: bool = False
    request_timeout: float = Field(default=30.0, gt=0.0)    # seconds, whole lookup

    # Reserved: accepted from configuration but not consulted by any lookup.
    cache_enabled: bool = True
    cache_ttl: float = 24 * 60 * 60                         # seconds
