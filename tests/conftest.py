"""Shared pytest fixtures for the Shoe Zone proxy test suite."""

from __future__ import annotations

import json
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.interfaces.upstream_client import IUpstreamClient
from src.providers.cache.memory_cache import MemoryCacheProvider

# ---------------------------------------------------------------------------
# Upstream reply builders
# ---------------------------------------------------------------------------

RAW_GLOUCESTER_STORE: dict[str, Any] = {
    "DisplayLine1": "SHOE ZONE GLOUCESTER",
    "Key": "1234",
    "Property": "Unit 4",
    "Street": "Eastgate Street",
    "PostCode": "GL1 1PA",
    "Telephone": "01452 300 000",
}

RAW_STORE_STOCK: dict[str, Any] = {
    "HasStock": True,
    "StoreName": "Gloucester",
    "StoreNo": "1234",
    "StoreAddress": "Unit 4, Eastgate Street, GL1 1PA",
}


def _locator_reply(
    stores: list[dict[str, Any]] | None = None,
    error_msg: str | None = None,
) -> dict[str, str]:
    """Wrap a locator payload the way the site does: JSON inside a ``d`` string."""
    return {"d": json.dumps({"Stores": stores, "ErrorMsg": error_msg})}


def _stock_reply(store_stock: dict[str, Any] | None = None) -> dict[str, dict[str, str]]:
    payload: dict[str, Any] = {"_prod_Action": {"val": "getStoreStock", "err": ""}}
    if store_stock is not None:
        payload["_prod_sNo_Stock"] = store_stock
    return {"d": {"data": json.dumps(payload)}}


@pytest.fixture
def locator_reply() -> Callable[..., dict[str, str]]:
    """Factory for ``FindRequestedStores`` replies."""
    return _locator_reply


@pytest.fixture
def stock_reply() -> Callable[..., dict[str, dict[str, str]]]:
    """Factory for ``StoreStockAjaxRequest`` replies."""
    return _stock_reply


@pytest.fixture
def raw_store() -> dict[str, Any]:
    return dict(RAW_GLOUCESTER_STORE)


@pytest.fixture
def raw_store_stock() -> dict[str, Any]:
    return dict(RAW_STORE_STOCK)


# ---------------------------------------------------------------------------
# Product page markup
# ---------------------------------------------------------------------------

PRODUCT_PAGE_HTML = """
<!DOCTYPE html>
<html>
<head><title>Wren Ladies Ankle Boot | Shoe Zone</title></head>
<body>
  <div id="bread-crumbs">
    <a class="breadcrumb" href="/">Home</a>
    <a class="breadcrumb" href="/Womens">Womens</a>
    <a class="breadcrumb" href="/Womens/Boots">Boots</a>
  </div>
  <div itemscope itemtype="http://schema.org/Product">
    <img id="main-image-0" src="https://images.shoezone.com/12345_main.jpg" alt="">
    <span itemprop="sku">12345</span>
    <h1 itemprop="name"> Wren Ladies Ankle Boot </h1>
    <div itemprop="offers" itemscope itemtype="http://schema.org/Offer">
      <meta itemprop="price" content="19.99">
      <meta itemprop="priceCurrency" content="gbp">
    </div>
  </div>
  <div id="divProdRightDT">
    <div class="grid">
      <div class="grid__col">Free delivery over £30</div>
      <div class="grid__col">
        <div class="float-right">
          <a href="/Offers/BOGOF" title="Buy One Get One Free"><img src="https://images.shoezone.com/bogof.png"></a>
          <a href="/Offers/Vegan" title="Vegan"><img src="https://images.shoezone.com/vegan.png"></a>
          <a href="/Offers/2for10" title="2 For £10"><img src="https://images.shoezone.com/2for10.png"></a>
        </div>
      </div>
    </div>
    <div class="grid">
      <div class="grid__col">
        <div class="float-right">
          <a href="/Offers/Other" title="Not An Offer Badge"><img src="https://images.shoezone.com/other.png"></a>
        </div>
      </div>
    </div>
  </div>
  <ul id="divSizeSelector">
    <li data-id="12345060" data-qty="4">6</li>
    <li data-id="12345070" data-qty="0">7</li>
    <li data-id="12345080" data-qty="12">uk 8</li>
    <li class="placeholder">Choose a size</li>
  </ul>
</body>
</html>
"""


@pytest.fixture
def product_page_html() -> str:
    """A product page with three sizes, two breadcrumbs past Home and three offer badges."""
    return PRODUCT_PAGE_HTML


# ---------------------------------------------------------------------------
# Provider fakes
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_client() -> MagicMock:
    """Mock upstream client; tests set ``post_ajax`` / ``fetch_page`` return values."""
    client = MagicMock(spec=IUpstreamClient)
    client.post_ajax = AsyncMock()
    client.fetch_page = AsyncMock()
    client.get_provider_name.return_value = "mock_upstream"
    return client


@pytest.fixture
def locator_cache() -> MemoryCacheProvider:
    return MemoryCacheProvider(name="store-locator-api")


@pytest.fixture
def product_cache() -> MemoryCacheProvider:
    return MemoryCacheProvider(name="product-api")
