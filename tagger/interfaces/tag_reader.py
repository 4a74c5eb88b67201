"""Abstract base class for embedded-tag readers.

Reading ID3/AIFF chunks is left to an external library; the batch processor
only needs this narrow contract.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from tagger.models.batch import EmbeddedTags


class ITagReader(ABC):
    """Contract for reading the tags already embedded in an audio file."""

    @abstractmethod
    def read(self, path: Path) -> EmbeddedTags | None:
        """Read embedded tags from *path*.

        Returns
        -------
        EmbeddedTags or None
            The file's tags, or ``None`` when the file carries no tags at all
            (the caller then falls back to parsing the filename).

        Raises
        ------
        OSError
            If the file cannot be opened.
        """
