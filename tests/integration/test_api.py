"""Integration tests for the FastAPI routes using TestClient."""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from src.main import create_app
from src.models.product import Offer, Price, Product, SizeEntry, SizeStock
from src.models.store import StockCheckResult, Store
from src.services.product_scraper import ProductScraper
from src.services.stock_checker import StockChecker
from src.services.store_locator import StoreLocator
from src.utils.errors import (
    ProductNotFoundError,
    ProductUnavailableError,
    StoreNotFoundError,
    UpstreamUnavailableError,
)

STORE = Store(
    store_name="Shoe Zone Gloucester",
    store_id=1234,
    store_address="Unit 4, Eastgate Street, GL1 1PA",
    store_phone="01452300000",
)

STOCK = StockCheckResult(
    in_stock=True,
    store_name="Gloucester",
    store_id=1234,
    store_address="Unit 4, Eastgate Street, GL1 1PA",
)

PRODUCT = Product(
    id=12345,
    name="Wren Ladies Ankle Boot",
    price=Price(current=Decimal("19.99")),
    currency="GBP",
    thumbnail="https://images.shoezone.com/12345_main.jpg",
    categories=["Home", "Womens", "Boots"],
    size_range=[SizeEntry(size="6", stock=SizeStock(warehouse=4), code="060")],
    offers=[Offer(name="Buy One Get One Free", image="https://x/bogof.png", abbr="BOGOF")],
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _create_test_app() -> tuple[TestClient, dict[str, MagicMock]]:
    """Create the app without its lifespan and put mocked services on app.state."""
    app = create_app(lifespan=None)

    locator = MagicMock(spec=StoreLocator)
    locator.locate_store = AsyncMock(return_value=STORE)
    checker = MagicMock(spec=StockChecker)
    checker.check_store_stock = AsyncMock(return_value=STOCK)
    scraper = MagicMock(spec=ProductScraper)
    scraper.get_product_info = AsyncMock(return_value=PRODUCT)

    app.state.store_locator = locator
    app.state.stock_checker = checker
    app.state.product_scraper = scraper

    services = {"locator": locator, "checker": checker, "scraper": scraper}
    return TestClient(app), services


@pytest.fixture()
def api():
    return _create_test_app()


# ---------------------------------------------------------------------------
# Root and catch-all
# ---------------------------------------------------------------------------


class TestRootAndFallback:
    def test_root_reports_online(self, api) -> None:
        client, _ = api
        response = client.get("/")
        assert response.status_code == 200
        assert response.json() == {"ok": True, "result": "The server is online"}

    def test_root_accepts_other_methods(self, api) -> None:
        client, _ = api
        assert client.post("/").json()["ok"] is True

    def test_unknown_path_is_404_envelope(self, api) -> None:
        client, _ = api
        response = client.get("/api/nothing-here")
        assert response.status_code == 404
        assert response.json() == {
            "ok": False,
            "result": '"/api/nothing-here" was not found on this server',
        }


# ---------------------------------------------------------------------------
# /api/locate
# ---------------------------------------------------------------------------


class TestLocateRoute:
    def test_success_envelope_is_camel_case(self, api) -> None:
        client, services = api
        response = client.get("/api/locate", params={"postcode": "GL1 1PA"})

        assert response.status_code == 200
        assert response.json() == {
            "ok": True,
            "result": {
                "storeName": "Shoe Zone Gloucester",
                "storeId": 1234,
                "storeAddress": "Unit 4, Eastgate Street, GL1 1PA",
                "storePhone": "01452300000",
            },
        }
        services["locator"].locate_store.assert_awaited_once_with(
            lat=None, lon=None, city=None, postcode="GL1 1PA"
        )

    def test_coordinates_passed_as_floats(self, api) -> None:
        client, services = api
        client.get("/api/locate", params={"lat": "51.5", "lon": "-0.1"})
        services["locator"].locate_store.assert_awaited_once_with(
            lat=51.5, lon=-0.1, city=None, postcode=None
        )

    def test_no_location_is_400(self, api) -> None:
        client, services = api
        response = client.get("/api/locate", params={"lat": "51.5"})

        assert response.status_code == 400
        assert response.json()["ok"] is False
        services["locator"].locate_store.assert_not_awaited()

    def test_store_not_found_uses_upstream_message(self, api) -> None:
        client, services = api
        services["locator"].locate_store.side_effect = StoreNotFoundError("No stores found near XX1")

        response = client.get("/api/locate", params={"city": "Atlantis"})

        assert response.status_code == 400
        assert response.json() == {"ok": False, "result": "No stores found near XX1"}

    def test_upstream_outage_is_502(self, api) -> None:
        client, services = api
        services["locator"].locate_store.side_effect = UpstreamUnavailableError("Timeout contacting site")

        response = client.get("/api/locate", params={"city": "Gloucester"})

        assert response.status_code == 502
        assert response.json()["result"] == "Timeout contacting site"

    def test_unexpected_error_is_generic_500(self, api) -> None:
        client, services = api
        services["locator"].locate_store.side_effect = RuntimeError("secret internals")

        response = client.get("/api/locate", params={"city": "Gloucester"})

        assert response.status_code == 500
        assert response.json() == {"ok": False, "result": "Internal server error"}

    def test_bad_latitude_is_400(self, api) -> None:
        client, _ = api
        response = client.get("/api/locate", params={"lat": "north", "lon": "0"})

        assert response.status_code == 400
        assert response.json()["result"].startswith("Invalid lat")


# ---------------------------------------------------------------------------
# /api/stock
# ---------------------------------------------------------------------------


class TestStockRoute:
    def test_splits_style_and_size(self, api) -> None:
        client, services = api
        response = client.get("/api/stock/1234/12345060")

        assert response.status_code == 200
        assert response.json()["result"]["inStock"] is True
        services["checker"].check_store_stock.assert_awaited_once_with(
            style_code="12345", size="060", store_id=1234, quantity=1
        )

    def test_six_digit_style(self, api) -> None:
        client, services = api
        client.get("/api/stock/1234/123456070")
        kwargs = services["checker"].check_store_stock.await_args.kwargs
        assert (kwargs["style_code"], kwargs["size"]) == ("123456", "070")

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("2.7", 2), ("-3", 1), ("0", 1), ("5", 5)],
    )
    def test_quantity_clamped(self, api, raw, expected) -> None:
        client, services = api
        client.get("/api/stock/1234/12345060", params={"quantity": raw})
        assert services["checker"].check_store_stock.await_args.kwargs["quantity"] == expected

    def test_short_style_code_is_400(self, api) -> None:
        client, services = api
        response = client.get("/api/stock/1234/060")

        assert response.status_code == 400
        services["checker"].check_store_stock.assert_not_awaited()

    def test_non_numeric_store_id_is_400(self, api) -> None:
        client, _ = api
        response = client.get("/api/stock/gloucester/12345060")

        assert response.status_code == 400
        assert response.json()["ok"] is False

    def test_product_unavailable_is_500(self, api) -> None:
        client, services = api
        services["checker"].check_store_stock.side_effect = ProductUnavailableError()

        response = client.get("/api/stock/1234/99999999")

        assert response.status_code == 500
        assert response.json() == {"ok": False, "result": "Product unavailable"}


# ---------------------------------------------------------------------------
# /api/product
# ---------------------------------------------------------------------------


class TestProductRoute:
    def test_product_envelope(self, api) -> None:
        client, services = api
        response = client.get("/api/product/12345678", params={"storeId": "1234"})

        assert response.status_code == 200
        result = response.json()["result"]
        assert result["id"] == 12345
        assert result["price"] == {"current": 19.99}
        assert result["sizeRange"] == [{"size": "6", "stock": {"warehouse": 4}, "code": "060"}]
        assert result["offers"][0]["abbr"] == "BOGOF"
        services["scraper"].get_product_info.assert_awaited_once_with("12345678", store_id=1234)

    def test_store_id_optional(self, api) -> None:
        client, services = api
        client.get("/api/product/12345")
        services["scraper"].get_product_info.assert_awaited_once_with("12345", store_id=None)

    def test_missing_product_is_404(self, api) -> None:
        client, services = api
        services["scraper"].get_product_info.side_effect = ProductNotFoundError(
            "No product page at /Products/Product-99999"
        )

        response = client.get("/api/product/99999")

        assert response.status_code == 404
        assert response.json() == {
            "ok": False,
            "result": "No product page at /Products/Product-99999",
        }
