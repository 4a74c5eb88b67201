"""Confidence scoring for metadata lookup results.

Providers turn match-quality signals into a single score in [0.0, 1.0] so
the enricher can compare results from different backends and gate them on
``min_confidence``.  Two operations live here:

1. **calculate_confidence** -- Additive score built from the exact/fuzzy
   match flag and the completeness of the returned metadata.
2. **confidence_to_level** -- Maps a numeric score to a human-readable
   tier (VERY_LOW through VERY_HIGH) for logging and batch summaries.
"""

from enum import Enum

_BASE_SCORE = 0.2           # something was found
_EXACT_MATCH_BONUS = 0.4    # artist and title both matched exactly
_FUZZY_MATCH_BONUS = 0.2
_LABEL_BONUS = 0.2
_DATE_BONUS = 0.1
_CATALOG_BONUS = 0.1


class ConfidenceLevel(Enum):
    """Human-readable confidence tiers."""

    VERY_LOW = "very_low"    # < 0.2
    LOW = "low"              # 0.2 - 0.4
    MEDIUM = "medium"        # 0.4 - 0.6
    HIGH = "high"            # 0.6 - 0.8
    VERY_HIGH = "very_high"  # >= 0.8


def calculate_confidence(
    exact_match: bool,
    *,
    has_label: bool = False,
    has_release_date: bool = False,
    has_catalog_number: bool = False,
) -> float:
    """Score a lookup result from its match quality and completeness.

    Starts at 0.2 for having found anything, adds 0.4 for an exact artist
    and title match (0.2 otherwise), then 0.2 for a label, 0.1 for a
    release date or year and 0.1 for a catalog number.

    Args:
        exact_match: True when both artist and title matched case-insensitively.
        has_label: The result carries a record label.
        has_release_date: The result carries a release date or a year.
        has_catalog_number: The result carries a catalog number.

    Returns:
        Score clamped to [0.0, 1.0].
    """
    score = _BASE_SCORE
    score += _EXACT_MATCH_BONUS if exact_match else _FUZZY_MATCH_BONUS

    if has_label:
        score += _LABEL_BONUS
    if has_release_date:
        score += _DATE_BONUS
    if has_catalog_number:
        score += _CATALOG_BONUS

    # 0.2 + 0.2 + 0.2 + 0.1 must compare equal to a 0.7 threshold.
    return round(max(0.0, min(1.0, score)), 6)


def confidence_to_level(score: float) -> ConfidenceLevel:
    """Map a numeric confidence score to a human-readable level.

    Args:
        score: Confidence score in [0.0, 1.0].

    Returns:
        Corresponding ConfidenceLevel enum member.
    """
    if score < 0.2:
        return ConfidenceLevel.VERY_LOW
    if score < 0.4:
        return ConfidenceLevel.LOW
    if score < 0.6:
        return ConfidenceLevel.MEDIUM
    if score < 0.8:
        return ConfidenceLevel.HIGH
    return ConfidenceLevel.VERY_HIGH
