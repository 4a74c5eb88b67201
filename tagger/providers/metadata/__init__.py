"""Metadata provider implementations.

Concrete implementations of IMetadataProvider, consulted by the enricher in
registration order:

    1. MusicBrainzProvider -- MusicBrainz open web service (no API key, but a
       contact-bearing User-Agent is expected). Rate limit: 1 req/sec.

Each provider returns the same TrackMetadata model so the enricher can
compare results from different sources by confidence.
"""

from tagger.providers.metadata.musicbrainz_provider import MusicBrainzProvider

__all__ = [
    "MusicBrainzProvider",
]
