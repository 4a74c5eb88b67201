"""Per-file enrichment over a list of audio files.

For each file the processor:

  1. reads the embedded tags through an injected :class:`ITagReader`;
  2. falls back to :func:`decompose_path` when the file has no tags,
     remembering any filename edge case for the report;
  3. classifies the file -- already labelled, missing artist/title, or a
     candidate for enrichment -- and, when an enricher is configured,
     looks the candidate up.

Files are processed one at a time against the shared enricher and its
providers, so provider rate limits hold across the whole batch.  Finding
the files and rendering the edge-case report are left to the caller.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Iterable

import structlog

from tagger.interfaces.tag_reader import ITagReader
from tagger.models.batch import BatchSummary, EmbeddedTags, FileOutcome, FileStatus
from tagger.models.filename import EdgeCase
from tagger.models.track import SearchRequest
from tagger.services.enricher import MetadataEnricher
from tagger.services.filename_parser import decompose_path
from tagger.utils.confidence import confidence_to_level
from tagger.utils.errors import TaggerError
from tagger.utils.logging import bound_file_context, get_logger

# ID3 frames that carry label information; later entries win.
_LABEL_FRAMES = ("TPUB", "TXXX")


class BatchProcessor:
    """Classifies and enriches audio files one after another.

    Parameters
    ----------
    tag_reader:
        Reads the tags already embedded in a file.
    enricher:
        Looks up missing label data.  Without one, files that would be
        enriched are reported as ``needs_enrichment``.
    """

    def __init__(
        self,
        tag_reader: ITagReader,
        enricher: MetadataEnricher | None = None,
    ) -> None:
        self._tag_reader = tag_reader
        self._enricher = enricher
        self._logger: structlog.BoundLogger = get_logger(__name__)

    async def process_files(self, paths: Iterable[str | Path]) -> BatchSummary:
        """Process *paths* in order and summarise the run."""
        outcomes: list[FileOutcome] = []
        for path in paths:
            outcomes.append(await self.process_file(path))

        summary = BatchSummary(outcomes=outcomes)
        self._logger.info(
            "Batch complete",
            total=summary.total,
            **{status.value: count for status, count in summary.status_counts.items()},
            edge_cases=sum(len(files) for files in summary.edge_cases.values()),
        )
        return summary

    async def process_file(self, path: str | Path) -> FileOutcome:
        """Read, classify and (if possible) enrich a single file."""
        path = Path(path)
        with bound_file_context(str(path)):
            return await self._process(path)

    async def _process(self, path: Path) -> FileOutcome:
        try:
            tags = self._tag_reader.read(path)
        except OSError as exc:
            self._logger.warning("Could not read file", error=str(exc))
            return FileOutcome(path=str(path), status=FileStatus.ERROR, error=str(exc))

        edge_case: EdgeCase | None = None
        if tags is None:
            parsed = decompose_path(path)
            self._logger.debug("No embedded tags, parsed filename", artist=parsed.artist, title=parsed.title)
            tags = EmbeddedTags(artist=parsed.artist, title=parsed.title)
            edge_case = parsed.edge_case

        artist = tags.artist.strip()
        title = tags.title.strip()
        label = _label_from_raw(tags.raw)

        def outcome(status: FileStatus, **fields: Any) -> FileOutcome:
            return FileOutcome(
                path=str(path),
                status=status,
                artist=artist,
                title=title,
                label=label,
                edge_case=edge_case,
                **fields,
            )

        if not (artist and title):
            self._logger.info("Missing artist or title, needs manual review", edge_case=edge_case)
            return outcome(FileStatus.NEEDS_ENRICHMENT)

        if label:
            self._logger.debug("File already has label", label=label)
            return outcome(FileStatus.HAS_LABEL)

        if self._enricher is None:
            return outcome(FileStatus.NEEDS_ENRICHMENT)

        request = SearchRequest(
            artist=artist,
            title=title,
            album=tags.album.strip() or None,
            genre=tags.genre.strip() or None,
            year=str(tags.year) if tags.year else None,
        )
        try:
            metadata = await self._enricher.lookup_with_request(request)
        except (TaggerError, asyncio.TimeoutError) as exc:
            self._logger.info("Enrichment failed", artist=artist, title=title, error=str(exc) or type(exc).__name__)
            return outcome(FileStatus.ENRICHMENT_FAILED, error=str(exc) or type(exc).__name__)

        self._logger.info(
            "Enrichment successful",
            artist=artist,
            title=title,
            label=metadata.label,
            release_date=metadata.release_date,
            confidence=metadata.confidence,
            confidence_level=confidence_to_level(metadata.confidence).value,
        )
        return outcome(FileStatus.ENRICHED, metadata=metadata)


def _label_from_raw(raw: dict[str, Any]) -> str:
    label = ""
    for frame in _LABEL_FRAMES:
        if frame in raw and raw[frame] is not None:
            label = _frame_text(raw[frame])
    return label


def _frame_text(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item).strip() for item in value if str(item).strip())
    return str(value).strip()
