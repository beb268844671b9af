"""Configuration module: exports Settings and the YAML config loader."""

from src.config.loader import get_ignored_offers, load_config
from src.config.settings import Settings

__all__ = ["Settings", "get_ignored_offers", "load_config"]
