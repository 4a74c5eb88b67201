"""Recover artist and title from a bare audio filename.

Untagged files in DJ collections are usually named ``Artist - Title`` but
often with extras: a track number (``01 ``, ``A1 - ``), an album in the
middle (``Artist - Album - Title``) or split artist credits
(``Artist - Feat - Album - Part - Title``).  The parser strips the
leading track/side prefix, counts the hyphens left and hands the name to
the split strategy registered for that count:

    hyphens  split                                   edge case
    -------  --------------------------------------  -------------
    0        two words -> artist, title; else empty  no_hyphens
    1        artist - title
    2        artist - album - title
    3        artist - ? - ? - title                  three_hyphens
    4        artist/artist - album/album - title
    5+       first segment - ... - last segment      many_hyphens

Every segment is whitespace-trimmed.  The parser never raises: names it
cannot split come back with empty fields and an edge-case tag, and the
caller decides what "not enough information" means.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Callable

from tagger.models.filename import EdgeCase, ParseResult
from tagger.utils.logging import get_logger

_logger = get_logger(__name__)

# Tried in order, each at most once, against the start of the name.  The
# whitespace forms must not swallow the space before a separating hyphen,
# so "01 - Artist - Title" is handled by the hyphen form.
_TRACK_PREFIX_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^\d+\.?\s+(?=[^\s-])"),   # "01 " or "1. "
    re.compile(r"^\d+\s*-\s*"),             # "01-" or "1 - "
    re.compile(r"^[A-Z]\d+\s+(?=[^\s-])"),  # "A1 " or "B2 "
    re.compile(r"^[A-Z]\d+\s*-\s*"),        # "A1-" or "B2 - "
)

_SplitStrategy = Callable[[str], tuple[str, str]]


def strip_track_prefix(name: str) -> str:
    """Remove a leading track number or vinyl side/position marker."""
    for pattern in _TRACK_PREFIX_PATTERNS:
        name = pattern.sub("", name, count=1)
    return name.strip()


# ---------------------------------------------------------------------------
# Split strategies, one per hyphen count range
# ---------------------------------------------------------------------------

def _split_words(name: str) -> tuple[str, str]:
    # Only an exact "Artist Title" pair is trusted.
    words = name.split()
    if len(words) == 2:
        return words[0], words[1]
    return "", ""


def _split_artist_title(name: str) -> tuple[str, str]:
    artist, title = name.split("-", 1)
    return artist.strip(), title.strip()


def _split_artist_album_title(name: str) -> tuple[str, str]:
    artist, _album, title = name.split("-", 2)
    return artist.strip(), title.strip()


def _split_outer_of_four(name: str) -> tuple[str, str]:
    parts = name.split("-", 3)
    return parts[0].strip(), parts[3].strip()


def _split_compound_credits(name: str) -> tuple[str, str]:
    parts = [part.strip() for part in name.split("-", 4)]
    _logger.debug("Detected album in filename", album=f"{parts[2]}/{parts[3]}")
    return f"{parts[0]}/{parts[1]}", parts[4]


def _split_first_last(name: str) -> tuple[str, str]:
    parts = name.split("-")
    return parts[0].strip(), parts[-1].strip()


# (min hyphens, max hyphens or None for unbounded, strategy, edge case)
_SPLIT_TABLE: tuple[tuple[int, int | None, _SplitStrategy, EdgeCase | None], ...] = (
    (0, 0, _split_words, EdgeCase.NO_HYPHENS),
    (1, 1, _split_artist_title, None),
    (2, 2, _split_artist_album_title, None),
    (3, 3, _split_outer_of_four, EdgeCase.THREE_HYPHENS),
    (4, 4, _split_compound_credits, None),
    (5, None, _split_first_last, EdgeCase.MANY_HYPHENS),
)


def _strategy_for(hyphen_count: int) -> tuple[_SplitStrategy, EdgeCase | None]:
    for low, high, strategy, edge_case in _SPLIT_TABLE:
        if hyphen_count >= low and (high is None or hyphen_count <= high):
            return strategy, edge_case
    raise ValueError(f"no split strategy for {hyphen_count} hyphens")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def decompose_filename(name: str) -> ParseResult:
    """Split an extension-less filename into artist and title.

    Args:
        name: The filename without directory or extension.

    Returns:
        A ParseResult whose ``edge_case`` is set when the split is a guess
        or impossible.  Empty artist/title means "could not tell".
    """
    cleaned = strip_track_prefix(name)
    hyphen_count = cleaned.count("-")
    strategy, edge_case = _strategy_for(hyphen_count)
    artist, title = strategy(cleaned)

    if edge_case is not None:
        _logger.debug(
            "Filename edge case",
            name=cleaned,
            edge_case=edge_case.value,
            hyphens=hyphen_count,
            artist=artist,
            title=title,
        )

    return ParseResult(artist=artist, title=title, edge_case=edge_case)


def decompose_path(path: str | Path) -> ParseResult:
    """Like :func:`decompose_filename`, but drops the directory and extension first."""
    return decompose_filename(Path(path).stem)
