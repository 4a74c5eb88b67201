"""Application settings loaded from environment variables via pydantic-settings.

Values are read, in priority order, from:

  1. Environment variables, e.g. ``ENRICHER_STRATEGY=best``
  2. A ``.env`` file in the working directory
  3. The defaults declared below

Field names map to upper-cased environment variable names automatically.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """tagger settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # === MusicBrainz ===
    # MusicBrainz asks every client to identify itself: app/version ( contact ).
    musicbrainz_app_name: str = "tagger"
    musicbrainz_app_version: str = "0.1.0"
    musicbrainz_contact: str = ""
    musicbrainz_base_url: str = "https://musicbrainz.org/ws/2"
    musicbrainz_min_interval: float = 1.0   # seconds between requests
    http_timeout: float = 30.0              # per HTTP request

    # === Enricher ===
    enricher_strategy: str = "first"
    enricher_min_confidence: float = 0.7
    enricher_require_label: bool = False
    enricher_request_timeout: float = 30.0  # whole lookup, all providers

    # Reserved for a cache layer; read but never consulted.
    cache_enabled: bool = True
    cache_ttl_hours: float = 24.0

    # === App Config ===
    app_env: str = "development"
    log_level: str = "INFO"

    def musicbrainz_user_agent(self) -> str:
        """Build the identifying ``User-Agent`` header MusicBrainz requires."""
        agent = f"{self.musicbrainz_app_name}/{self.musicbrainz_app_version}"
        if self.musicbrainz_contact:
            agent += f" ( {self.musicbrainz_contact} )"
        return agent
