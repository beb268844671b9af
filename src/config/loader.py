"""YAML configuration loader with environment variable overrides.

Configuration is loaded in layers (later layers override earlier):

  1. config/config.yaml  -- static defaults checked into the repo
  2. .env file           -- local developer overrides (not committed)
  3. Environment vars    -- set at deploy time

``load_config()`` reads the YAML file first, then deep-merges the
environment-based values on top, e.g.::

    base      = {"cache": {"files": {"locator": "store-locator-api"}}}
    overrides = {"cache": {"dir": "/var/cache/sz"}}
    result    = {"cache": {"files": {...}, "dir": "/var/cache/sz"}}
"""

from pathlib import Path

import yaml

from src.config.settings import Settings
from src.utils.errors import ConfigurationError


def load_config(path: str = "config/config.yaml", settings: Settings | None = None) -> dict:
    """Load YAML config and merge with environment-based Settings.

    Args:
        path: Path to the YAML configuration file.
        settings: Settings instance to merge; a fresh one is built if omitted.

    Returns:
        Fully resolved configuration dictionary.
    """
    config_path = Path(path)
    if config_path.exists():
        with open(config_path) as f:
            try:
                yaml_config = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ConfigurationError(
                    message=f"Invalid YAML in {config_path}: {exc}",
                    provider_name="config_loader",
                ) from exc
    else:
        yaml_config = {}

    if not isinstance(yaml_config, dict):
        raise ConfigurationError(
            message=f"Expected a mapping at the top of {config_path}",
            provider_name="config_loader",
        )

    settings = settings or Settings()
    env_overrides = {
        "app": {
            "host": settings.app_host,
            "port": settings.app_port,
            "env": settings.app_env,
            "cors_origins": settings.cors_origins,
        },
        "upstream": {
            "api_url": settings.sz_api_url,
            "site_url": settings.sz_site_url,
            "timeout": settings.http_timeout,
        },
        "cache": {
            "dir": settings.cache_dir,
            "backend": settings.cache_backend,
            "page_ttl_ms": settings.page_cache_ttl_ms,
        },
        "logging": {
            "level": settings.log_level,
        },
    }

    _deep_merge(yaml_config, env_overrides)
    return yaml_config


def get_ignored_offers(config: dict) -> frozenset[str]:
    """Return the lower-cased offer titles that should never be reported."""
    raw = config.get("offers", {}).get("ignored", []) or []
    return frozenset(str(name).strip().lower() for name in raw)


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
