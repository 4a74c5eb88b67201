"""Utility modules for tagger.

- **confidence** -- Additive match-quality scoring and human-readable level
  mapping used by providers and batch summaries.
- **errors** -- Domain-specific exception hierarchy rooted at TaggerError.
- **logging** -- structlog setup: console output in development,
  structured JSON in production.
- **rate_limiter** -- Per-provider pacing of outbound requests.
"""

from tagger.utils.confidence import (
    ConfidenceLevel,
    calculate_confidence,
    confidence_to_level,
)
from tagger.utils.errors import (
    APIError,
    ConfigurationError,
    NoProviderError,
    NotFoundError,
    RateLimitError,
    TaggerError,
)
from tagger.utils.logging import bound_file_context, configure_logging, get_logger
from tagger.utils.rate_limiter import RateLimiter

__all__ = [
    "APIError",
    "ConfidenceLevel",
    "ConfigurationError",
    "NoProviderError",
    "NotFoundError",
    "RateLimitError",
    "RateLimiter",
    "TaggerError",
    "bound_file_context",
    "calculate_confidence",
    "confidence_to_level",
    "configure_logging",
    "get_logger",
]
