"""Services that drive lookups and interpret filenames.

- **enricher** -- MetadataEnricher: multi-provider lookup under the
  first / best / fallback strategies with confidence and label gates.
- **filename_parser** -- decompose_filename / decompose_path: hyphen-count
  heuristics that recover artist and title from untagged files.
- **batch_processor** -- BatchProcessor: one-file-at-a-time composition of
  the two, producing per-file statuses and the edge-case mapping.
"""

from tagger.services.batch_processor import BatchProcessor
from tagger.services.enricher import MetadataEnricher
from tagger.services.filename_parser import decompose_filename, decompose_path, strip_track_prefix

__all__ = [
    "BatchProcessor",
    "MetadataEnricher",
    "decompose_filename",
    "decompose_path",
    "strip_track_prefix",
]
