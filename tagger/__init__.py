"""tagger -- label and release-date enrichment for sparsely tagged audio files."""

__version__ = "0.1.0"
