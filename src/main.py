"""Shoe Zone proxy FastAPI application entry point.

Wires the upstream client, cache stores, HTML parser and services together
via constructor injection, configures structured logging, and exposes the
routes under ``/api``.

Also provides ``build_services`` for the CLI, which needs the same
components without a web server.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI

from src.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
    register_exception_handlers,
)
from src.api.routes import router as api_router
from src.api.schemas import success
from src.config.loader import get_ignored_offers, load_config
from src.config.settings import Settings
from src.interfaces.cache_provider import ICacheProvider
from src.providers.cache.json_file_cache import JsonFileCacheProvider
from src.providers.cache.memory_cache import MemoryCacheProvider
from src.providers.html.beautifulsoup_parser import BeautifulSoupParser
from src.providers.upstream.shoezone_client import ShoeZoneClient
from src.services.product_scraper import ProductScraper
from src.services.stock_checker import StockChecker
from src.services.store_locator import StoreLocator
from src.utils.errors import ConfigurationError
from src.utils.logging import configure_logging, get_logger

_VERSION = "0.1.0"
_DEFAULT_CACHE_FILES = {"locator": "store-locator-api", "products": "product-api"}

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()
config = load_config(settings=settings)

configure_logging(
    log_level=settings.log_level,
    json_output=(settings.app_env == "production"),
)
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Component assembly
# ---------------------------------------------------------------------------


def build_cache(domain: str, app_settings: Settings, app_config: dict) -> ICacheProvider:
    """Return the cache provider for one data domain (``"locator"`` or ``"products"``)."""
    files = {**_DEFAULT_CACHE_FILES, **app_config.get("cache", {}).get("files", {})}
    name = files[domain]

    if app_settings.cache_backend == "memory":
        return MemoryCacheProvider(name=name)
    if app_settings.cache_backend == "file":
        return JsonFileCacheProvider(Path(app_settings.cache_dir) / f"{name}.json")
    raise ConfigurationError(
        message=f"Unknown CACHE_BACKEND {app_settings.cache_backend!r}; use 'file' or 'memory'",
        provider_name="cache",
    )


def build_services(
    app_settings: Settings | None = None,
    app_config: dict | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> dict[str, Any]:
    """Construct every provider and service instance.

    Returns a flat dict of named components.  Caches are not loaded yet;
    callers must await ``load()`` on ``locator_cache`` and
    ``product_cache`` before serving requests.
    """
    s = app_settings or settings
    c = app_config if app_config is not None else config

    client = ShoeZoneClient(
        api_url=s.sz_api_url,
        site_url=s.sz_site_url,
        http_client=http_client,
        timeout=s.http_timeout,
    )
    locator_cache = build_cache("locator", s, c)
    product_cache = build_cache("products", s, c)

    return {
        "upstream_client": client,
        "locator_cache": locator_cache,
        "product_cache": product_cache,
        "store_locator": StoreLocator(client=client, cache=locator_cache),
        "stock_checker": StockChecker(client=client),
        "product_scraper": ProductScraper(
            client=client,
            parser=BeautifulSoupParser(),
            cache=product_cache,
            ignored_offers=get_ignored_offers(c),
            page_ttl_ms=s.page_cache_ttl_ms,
        ),
    }


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _lifespan(application: FastAPI):  # noqa: ANN201
    """Build services and load the cache files on startup, close the HTTP client on shutdown."""
    components = build_services(settings, config)

    for key, value in components.items():
        setattr(application.state, key, value)

    await components["locator_cache"].load()
    await components["product_cache"].load()

    _logger.info(
        "app_startup",
        version=_VERSION,
        environment=settings.app_env,
        upstream=settings.sz_api_url,
        cache_backend=settings.cache_backend,
    )

    yield

    client: ShoeZoneClient = components["upstream_client"]
    await client.aclose()
    _logger.info("app_shutdown", message="HTTP client closed")


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app(lifespan=_lifespan) -> FastAPI:  # noqa: ANN001
    """Build and configure the FastAPI application.

    Tests pass ``lifespan=None`` and populate ``app.state`` themselves.
    """
    application = FastAPI(
        title="Shoe Zone proxy API",
        version=_VERSION,
        description=(
            "Read-only JSON API over the Shoe Zone website: store locator, "
            "per-store stock checks, and scraped product details."
        ),
        lifespan=lifespan,
    )

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application, allowed_origins=settings.cors_origins)
    register_exception_handlers(application)

    # -- API routes --
    application.include_router(api_router)

    @application.api_route(
        "/",
        methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        include_in_schema=False,
    )
    async def root() -> dict[str, Any]:
        return success("The server is online")

    return application


app = create_app()

# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    uvicorn.run(
        "src.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )
