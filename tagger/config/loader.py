"""YAML configuration loader with environment variable overrides.

Configuration is loaded in layers (later layers override earlier):

  1. config/config.yaml  -- static defaults
  2. .env file           -- local overrides
  3. Environment vars    -- set per machine / per run

Only settings that were explicitly provided through ``.env`` or the
environment override the YAML file; a Settings default never masks a
value written in config.yaml.
"""

from pathlib import Path

import yaml

from tagger.config.settings import Settings

# Settings field -> (section, key) in the resolved configuration dict.
_SETTINGS_LAYOUT: dict[str, tuple[str, str]] = {
    "musicbrainz_app_name": ("musicbrainz", "app_name"),
    "musicbrainz_app_version": ("musicbrainz", "app_version"),
    "musicbrainz_contact": ("musicbrainz", "contact"),
    "musicbrainz_base_url": ("musicbrainz", "base_url"),
    "musicbrainz_min_interval": ("musicbrainz", "min_interval"),
    "http_timeout": ("musicbrainz", "http_timeout"),
    "enricher_strategy": ("enricher", "strategy"),
    "enricher_min_confidence": ("enricher", "min_confidence"),
    "enricher_require_label": ("enricher", "require_label"),
    "enricher_request_timeout": ("enricher", "request_timeout"),
    "cache_enabled": ("cache", "enabled"),
    "cache_ttl_hours": ("cache", "ttl_hours"),
    "app_env": ("app", "env"),
    "log_level": ("logging", "level"),
}


def load_config(path: str = "config/config.yaml", settings: Settings | None = None) -> dict:
    """Load YAML config and merge explicitly-set Settings on top.

    Args:
        path: Path to the YAML configuration file. A missing file is not an error.
        settings: Pre-built settings; a fresh ``Settings()`` is read otherwise.

    Returns:
        Fully resolved configuration dictionary.
    """
    config_path = Path(path)
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f) or {}
    else:
        yaml_config = {}

    settings = settings or Settings()
    resolved = _settings_to_sections(settings, type(settings).model_fields.keys())
    _deep_merge(resolved, yaml_config)
    _deep_merge(resolved, _settings_to_sections(settings, settings.model_fields_set))
    return resolved


def _settings_to_sections(settings: Settings, field_names) -> dict:
    sections: dict = {}
    for field_name in field_names:
        if field_name not in _SETTINGS_LAYOUT:
            continue
        section, key = _SETTINGS_LAYOUT[field_name]
        sections.setdefault(section, {})[key] = getattr(settings, field_name)
    return sections


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
