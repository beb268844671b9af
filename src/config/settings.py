"""Application settings loaded from environment variables via pydantic-settings.

Values are read from two sources, in priority order:

  1. Environment variables, e.g. ``SZ_API_URL=https://staging.shoezone.com``
  2. A ``.env`` file in the project root (local development only)

Field ``sz_api_url`` maps to env var ``SZ_API_URL``; defaults below apply
when neither source sets a value.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Shoe Zone proxy settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === Upstream site ===
    # AJAX endpoints (store locator, stock checker) hang off the API URL;
    # product pages are fetched from the site URL.  Both are usually the
    # same host but are kept apart so either can be pointed at a mirror.
    sz_api_url: str = "https://www.shoezone.com"
    sz_site_url: str = "https://www.shoezone.com"
    http_timeout: float = 30.0

    # === Cache ===
    cache_dir: str = "data/cache"
    cache_backend: str = "file"  # "file" (durable JSON) or "memory"
    page_cache_ttl_ms: int = 60_000

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    app_env: str = "development"
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]
