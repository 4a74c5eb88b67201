"""Custom exception hierarchy for tagger.

All application exceptions inherit from :class:`TaggerError`, which carries
an optional ``provider_name`` so error handlers can identify which metadata
backend (e.g. "MusicBrainz") caused the failure.

    TaggerError  (base -- catch-all for any tagger error)
    +-- NotFoundError        (no qualifying candidate at any lookup stage)
    +-- APIError             (transport failure or non-success HTTP status)
    |   +-- RateLimitError   (remote service refused the request: 429 / 503)
    +-- NoProviderError      (enricher has no registered providers)
    +-- ConfigurationError   (startup / invalid config values)

Cancellation and deadline errors raised by asyncio are not part of the hierarchy:
they propagate to the caller untouched.
"""


class TaggerError(Exception):
    """Base exception for all tagger errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which metadata provider triggered the
    error.  ``__str__`` prefixes the provider name in brackets for
    structured log output, e.g. ``[MusicBrainz] no recordings found``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Lookup errors
# ---------------------------------------------------------------------------

class NotFoundError(TaggerError):
    """Raised when no qualifying metadata candidate was found."""

    def __init__(
        self,
        message: str = "No metadata found",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class APIError(TaggerError):
    """Raised when a remote metadata service call fails.

    Covers transport failures, non-success HTTP status codes and
    unparseable response bodies.  The underlying cause is chained via
    ``raise ... from exc``; ``status_code`` is set when the server
    answered at all.
    """

    def __init__(
        self,
        message: str = "Metadata API call failed",
        provider_name: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self._status_code = status_code
        super().__init__(message=message, provider_name=provider_name)

    @property
    def status_code(self) -> int | None:
        return self._status_code


class RateLimitError(APIError):
    """Raised when the remote service rejects a request for exceeding its rate limit."""

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        provider_name: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name, status_code=status_code)


# ---------------------------------------------------------------------------
# Orchestration / configuration errors
# ---------------------------------------------------------------------------

class NoProviderError(TaggerError):
    """Raised when the enricher is asked to look something up with no providers."""

    def __init__(
        self,
        message: str = "No providers available",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ConfigurationError(TaggerError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
