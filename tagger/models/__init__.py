"""tagger domain models -- re-exports all public model classes.

The models are organized by concern:
    - track.py        -- TrackMetadata, SearchRequest, RateLimitInfo
    - enrichment.py   -- EnricherConfig and the provider strategies
    - filename.py     -- ParseResult and the filename edge cases
    - musicbrainz.py  -- MusicBrainz JSON response shapes
    - batch.py        -- per-file outcomes and batch summaries
"""

from __future__ import annotations

from tagger.models.batch import BatchSummary, EmbeddedTags, FileOutcome, FileStatus
from tagger.models.enrichment import EnricherConfig, ProviderStrategy
from tagger.models.filename import EdgeCase, ParseResult
from tagger.models.track import RateLimitInfo, SearchRequest, TrackMetadata

__all__ = [
    "BatchSummary",
    "EdgeCase",
    "EmbeddedTags",
    "EnricherConfig",
    "FileOutcome",
    "FileStatus",
    "ParseResult",
    "ProviderStrategy",
    "RateLimitInfo",
    "SearchRequest",
    "TrackMetadata",
]
