"""Result of decomposing a filename into artist and title."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class EdgeCase(str, Enum):  # noqa: UP042 -- StrEnum requires Python 3.11+
    """Filename shapes the parser cannot split with confidence.

    The values double as keys of the edge-case report.
    """

    NO_HYPHENS = "no_hyphens"
    THREE_HYPHENS = "three_hyphens"
    MANY_HYPHENS = "many_hyphens"


class ParseResult(BaseModel):
    """Artist/title recovered from a filename.

    Empty strings mean "not enough information"; ``edge_case`` is set only
    when the split was a guess (or impossible).
    """

    model_config = ConfigDict(frozen=True)

    artist: str = ""
    title: str = ""
    edge_case: EdgeCase | None = None

    @property
    def has_basic_info(self) -> bool:
        return bool(self.artist and self.title)
