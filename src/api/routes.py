"""FastAPI routes for the Shoe Zone proxy.

Endpoint                                Method  Description
─────────────────────────────────────────────────────────────────────────
/api/locate                             GET     Nearest store to a city, postcode or lat/lon
/api/stock/{store_id}/{style_code}      GET     Whether a store has a style/size in stock
/api/product/{style_code}               GET     Product details scraped from the product page

Services are resolved from ``app.state`` (populated at startup in
``src/main.py``) through ``Annotated[..., Depends(...)]`` aliases, so
tests can put fakes on ``app.state`` instead.  Errors raised by the
services are turned into envelopes by ``ErrorHandlingMiddleware``.
"""

from __future__ import annotations

import math
from typing import Annotated, Any

import structlog
from fastapi import APIRouter, Depends, Query, Request

from src.api.schemas import ProductResponse, StockResponse, StoreResponse, success
from src.services.product_scraper import ProductScraper
from src.services.stock_checker import StockChecker
from src.services.store_locator import StoreLocator
from src.utils.errors import ShoeZoneProxyError
from src.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

router = APIRouter(prefix="/api")

_SIZE_CODE_LENGTH = 3


# ---------------------------------------------------------------------------
# Dependency injection helpers: resolve singletons from app.state
# ---------------------------------------------------------------------------


def _get_store_locator(request: Request) -> StoreLocator:
    return request.app.state.store_locator


def _get_stock_checker(request: Request) -> StockChecker:
    return request.app.state.stock_checker


def _get_product_scraper(request: Request) -> ProductScraper:
    return request.app.state.product_scraper


StoreLocatorDep = Annotated[StoreLocator, Depends(_get_store_locator)]
StockCheckerDep = Annotated[StockChecker, Depends(_get_stock_checker)]
ProductScraperDep = Annotated[ProductScraper, Depends(_get_product_scraper)]


def clamp_quantity(quantity: float | None) -> int:
    """Return a whole quantity of at least 1 (``None`` -> 1, 2.7 -> 2, -3 -> 1)."""
    if quantity is None or math.isnan(quantity):
        return 1
    return math.floor(max(1.0, quantity))


def split_style_code(style_code: str) -> tuple[str, str]:
    """Split "12345678" into the style ("12345") and its 3-character size code ("678")."""
    style_code = style_code.strip()
    if len(style_code) <= _SIZE_CODE_LENGTH:
        raise ShoeZoneProxyError(
            message="Style code must end with a 3-character size code",
            status_code=400,
        )
    return style_code[:-_SIZE_CODE_LENGTH], style_code[-_SIZE_CODE_LENGTH:]


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.get("/locate", response_model=StoreResponse)
async def locate_store(
    locator: StoreLocatorDep,
    city: str | None = None,
    postcode: str | None = None,
    lat: float | None = None,
    lon: float | None = None,
) -> dict[str, Any]:
    """Find the store nearest to a city, postcode, or latitude/longitude pair."""
    if not any((city, postcode, lat is not None and lon is not None)):
        raise ShoeZoneProxyError(
            message="Provide a city, a postcode, or both lat and lon",
            status_code=400,
        )
    store = await locator.locate_store(lat=lat, lon=lon, city=city, postcode=postcode)
    return success(store)


@router.get("/stock/{store_id}/{style_code}", response_model=StockResponse)
async def check_stock(
    store_id: int,
    style_code: str,
    checker: StockCheckerDep,
    quantity: float | None = None,
) -> dict[str, Any]:
    """Check whether a store has a style/size in stock.

    ``style_code`` carries the size code as its last 3 characters.
    """
    style, size = split_style_code(style_code)
    result = await checker.check_store_stock(
        style_code=style,
        size=size,
        store_id=store_id,
        quantity=clamp_quantity(quantity),
    )
    return success(result)


@router.get("/product/{style_code}", response_model=ProductResponse)
async def get_product(
    style_code: str,
    scraper: ProductScraperDep,
    store_id: Annotated[int | None, Query(alias="storeId")] = None,
) -> dict[str, Any]:
    """Return product details; ``storeId`` is accepted but has no effect yet."""
    product = await scraper.get_product_info(style_code, store_id=store_id)
    return success(product)
