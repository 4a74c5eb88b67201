"""Public interface definitions for external collaborators.

Every metadata backend is accessed through :class:`IMetadataProvider`, and
embedded tags are read through :class:`ITagReader`.  Concrete adapters
implement these interfaces and are injected at construction time
(see ``tagger/main.py``), so unit tests can substitute fakes.

CONCRETE PROVIDER MAP:
    Interface            →  Concrete implementations
    ───────────────────────────────────────────────────────────
    IMetadataProvider    →  MusicBrainzProvider
    ITagReader           →  (supplied by the caller)
"""

from tagger.interfaces.metadata_provider import IMetadataProvider
from tagger.interfaces.tag_reader import ITagReader

__all__ = [
    "IMetadataProvider",
    "ITagReader",
]
