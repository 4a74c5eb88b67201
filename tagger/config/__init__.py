"""Configuration module -- exports Settings and load_config."""

from tagger.config.loader import load_config
from tagger.config.settings import Settings

__all__ = ["Settings", "load_config"]
