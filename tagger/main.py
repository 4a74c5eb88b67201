"""Wiring for tagger: builds providers, the enricher and the batch processor.

Loads configuration from ``config/config.yaml`` with ``.env`` / environment
overrides, configures structured logging, and injects every dependency
through constructors so each piece can be swapped in tests.
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError

from tagger.config.loader import load_config
from tagger.config.settings import Settings
from tagger.interfaces.metadata_provider import IMetadataProvider
from tagger.interfaces.tag_reader import ITagReader
from tagger.models.enrichment import EnricherConfig, ProviderStrategy
from tagger.providers.metadata.musicbrainz_provider import MusicBrainzProvider
from tagger.services.batch_processor import BatchProcessor
from tagger.services.enricher import MetadataEnricher
from tagger.utils.errors import ConfigurationError
from tagger.utils.logging import configure_logging, get_logger

_DEFAULT_CONFIG_PATH = "config/config.yaml"


def build_enricher_config(config: dict[str, Any]) -> EnricherConfig:
    """Translate the ``enricher`` / ``cache`` config sections into an EnricherConfig.

    Raises
    ------
    ConfigurationError
        If the strategy is unknown or a value is out of range.
    """
    section = config.get("enricher", {})
    cache = config.get("cache", {})

    raw_strategy = str(section.get("strategy", ProviderStrategy.FIRST.value)).strip().lower()
    try:
        strategy = ProviderStrategy(raw_strategy)
    except ValueError as exc:
        valid = ", ".join(s.value for s in ProviderStrategy)
        raise ConfigurationError(
            f"Unknown enricher strategy '{raw_strategy}' (expected one of: {valid})"
        ) from exc

    try:
        return EnricherConfig(
            strategy=strategy,
            min_confidence=section.get("min_confidence", 0.7),
            require_label=section.get("require_label", False),
            request_timeout=section.get("request_timeout", 30.0),
            cache_enabled=cache.get("enabled", True),
            cache_ttl=float(cache.get("ttl_hours", 24.0)) * 3600,
        )
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid enricher configuration: {exc}") from exc


def _provider_settings(base: Settings, config: dict[str, Any]) -> Settings:
    """Overlay the resolved ``musicbrainz`` section onto *base*."""
    section = config.get("musicbrainz", {})
    field_map = {
        "app_name": "musicbrainz_app_name",
        "app_version": "musicbrainz_app_version",
        "contact": "musicbrainz_contact",
        "base_url": "musicbrainz_base_url",
        "min_interval": "musicbrainz_min_interval",
        "http_timeout": "http_timeout",
    }
    update = {field: section[key] for key, field in field_map.items() if key in section}
    return base.model_copy(update=update)


def build_providers(
    app_settings: Settings,
    http_client: httpx.AsyncClient | None = None,
) -> list[IMetadataProvider]:
    """Construct the metadata providers in priority order."""
    return [MusicBrainzProvider(settings=app_settings, http_client=http_client)]


def build_enricher(
    custom_settings: Settings | None = None,
    http_client: httpx.AsyncClient | None = None,
    config_path: str = _DEFAULT_CONFIG_PATH,
) -> MetadataEnricher:
    """Construct a MetadataEnricher with every configured provider.

    Parameters
    ----------
    custom_settings:
        Application settings.  Read from the environment if not provided.
    http_client:
        Shared HTTP client.  When omitted each provider creates (and on
        ``close()`` releases) its own.
    config_path:
        YAML defaults layered under the settings.
    """
    base = custom_settings or Settings()
    config = load_config(config_path, settings=base)

    configure_logging(
        log_level=config.get("logging", {}).get("level", base.log_level),
        json_output=(config.get("app", {}).get("env", base.app_env) == "production"),
    )
    logger = get_logger(__name__)

    enricher_config = build_enricher_config(config)
    providers = build_providers(_provider_settings(base, config), http_client=http_client)

    logger.info(
        "Enricher assembled",
        strategy=enricher_config.strategy.value,
        min_confidence=enricher_config.min_confidence,
        require_label=enricher_config.require_label,
        providers=[p.get_provider_name() for p in providers],
    )
    return MetadataEnricher(providers=providers, config=enricher_config)


def build_batch_processor(
    tag_reader: ITagReader,
    custom_settings: Settings | None = None,
    http_client: httpx.AsyncClient | None = None,
    config_path: str = _DEFAULT_CONFIG_PATH,
    enrich: bool = True,
) -> BatchProcessor:
    """Construct a BatchProcessor; with ``enrich=False`` no providers are built."""
    enricher = (
        build_enricher(custom_settings, http_client=http_client, config_path=config_path)
        if enrich
        else None
    )
    return BatchProcessor(tag_reader=tag_reader, enricher=enricher)
