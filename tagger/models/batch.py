"""Models for processing a list of audio files one at a time.

``EmbeddedTags`` is what a tag reader hands back for a file that already
carries tags.  ``FileOutcome`` records what happened to one file and
``BatchSummary`` aggregates a whole run, including the edge-case mapping
consumed by the report generator.
"""

from __future__ import annotations

from collections import Counter
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from tagger.models.filename import EdgeCase
from tagger.models.track import TrackMetadata


class FileStatus(str, Enum):  # noqa: UP042 -- StrEnum requires Python 3.11+
    """Where a file ended up after processing."""

    HAS_LABEL = "has_label"                   # tags already carry a label
    ENRICHED = "enriched"                     # a provider supplied label/date info
    ENRICHMENT_FAILED = "enrichment_failed"   # lookup raised
    NEEDS_ENRICHMENT = "needs_enrichment"     # no artist/title, or no enricher
    ERROR = "error"                           # file could not be read


class EmbeddedTags(BaseModel):
    """Tags already present in a file.

    ``raw`` is the reader's unprocessed frame map (ID3 frame id -> value),
    used to spot label frames such as ``TPUB``.
    """

    model_config = ConfigDict(frozen=True)

    title: str = ""
    artist: str = ""
    album: str = ""
    genre: str = ""
    year: int | None = None
    raw: dict[str, Any] = Field(default_factory=dict)


class FileOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str
    status: FileStatus
    artist: str = ""
    title: str = ""
    label: str = ""
    edge_case: EdgeCase | None = None
    metadata: TrackMetadata | None = None
    error: str | None = None


class BatchSummary(BaseModel):
    """Aggregate of a batch run, in input order."""

    model_config = ConfigDict(frozen=True)

    outcomes: list[FileOutcome] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def status_counts(self) -> dict[FileStatus, int]:
        counts = Counter(outcome.status for outcome in self.outcomes)
        return {status: counts.get(status, 0) for status in FileStatus}

    @property
    def edge_cases(self) -> dict[str, list[str]]:
        """Edge-case tag -> paths of the files that hit it."""
        grouped: dict[str, list[str]] = {}
        for outcome in self.outcomes:
            if outcome.edge_case is not None:
                grouped.setdefault(outcome.edge_case.value, []).append(outcome.path)
        return grouped
