"""Unit tests for the query CLI (src.cli.query)."""

from __future__ import annotations

import json
from argparse import Namespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.cli.query import _build_parser, _run
from src.models.store import StockCheckResult, Store
from src.providers.cache.memory_cache import MemoryCacheProvider
from src.utils.errors import StoreNotFoundError


def _components() -> dict:
    store_locator = MagicMock()
    store_locator.locate_store = AsyncMock(
        return_value=Store(
            store_name="Shoe Zone Gloucester",
            store_id=1234,
            store_address="Unit 4, Eastgate Street, GL1 1PA",
            store_phone="01452300000",
        )
    )
    stock_checker = MagicMock()
    stock_checker.check_store_stock = AsyncMock(
        return_value=StockCheckResult(
            in_stock=True, store_name="Gloucester", store_id=1234, store_address="Unit 4"
        )
    )
    upstream_client = MagicMock()
    upstream_client.aclose = AsyncMock()
    return {
        "upstream_client": upstream_client,
        "locator_cache": MemoryCacheProvider(name="store-locator-api"),
        "product_cache": MemoryCacheProvider(name="product-api"),
        "store_locator": store_locator,
        "stock_checker": stock_checker,
        "product_scraper": MagicMock(),
    }


# ======================================================================
# Argument parsing
# ======================================================================


class TestBuildParser:
    def test_locate_arguments(self) -> None:
        args = _build_parser().parse_args(["locate", "--lat", "51.5", "--lon", "-0.1"])
        assert args.command == "locate"
        assert args.lat == 51.5
        assert args.lon == -0.1
        assert args.city is None

    def test_stock_arguments(self) -> None:
        args = _build_parser().parse_args(["stock", "12345", "060", "--store-id", "1234"])
        assert (args.style_code, args.size, args.store_id, args.quantity) == ("12345", "060", 1234, 1)

    def test_stock_requires_store_id(self) -> None:
        with pytest.raises(SystemExit):
            _build_parser().parse_args(["stock", "12345", "060"])

    def test_cache_domain_defaults_to_all(self) -> None:
        args = _build_parser().parse_args(["cache", "show"])
        assert args.domain == "all"

    def test_cache_rejects_unknown_domain(self) -> None:
        with pytest.raises(SystemExit):
            _build_parser().parse_args(["cache", "clear", "everything"])


# ======================================================================
# Command execution
# ======================================================================


class TestRun:
    @pytest.mark.asyncio
    async def test_locate_prints_success_envelope(self, capsys) -> None:
        components = _components()
        args = Namespace(command="locate", city=None, postcode="GL1 1PA", lat=None, lon=None)

        exit_code = await _run(args, components)

        assert exit_code == 0
        output = json.loads(capsys.readouterr().out)
        assert output["ok"] is True
        assert output["result"]["storeId"] == 1234
        components["upstream_client"].aclose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_locate_without_location_fails(self, capsys) -> None:
        components = _components()
        args = Namespace(command="locate", city=None, postcode=None, lat=51.5, lon=None)

        exit_code = await _run(args, components)

        assert exit_code == 1
        assert json.loads(capsys.readouterr().out)["ok"] is False
        components["store_locator"].locate_store.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_proxy_error_prints_failure_envelope(self, capsys) -> None:
        components = _components()
        components["store_locator"].locate_store.side_effect = StoreNotFoundError("No stores found")
        args = Namespace(command="locate", city="Atlantis", postcode=None, lat=None, lon=None)

        exit_code = await _run(args, components)

        captured = capsys.readouterr()
        assert exit_code == 1
        assert json.loads(captured.out) == {"ok": False, "result": "No stores found"}
        assert "400" in captured.err

    @pytest.mark.asyncio
    async def test_stock_passes_arguments(self, capsys) -> None:
        components = _components()
        args = Namespace(command="stock", style_code="12345", size="060", store_id=1234, quantity=2)

        exit_code = await _run(args, components)

        assert exit_code == 0
        components["stock_checker"].check_store_stock.assert_awaited_once_with(
            style_code="12345", size="060", store_id=1234, quantity=2
        )
        assert json.loads(capsys.readouterr().out)["result"]["inStock"] is True

    @pytest.mark.asyncio
    async def test_cache_show_lists_entries(self, capsys) -> None:
        components = _components()
        await components["locator_cache"].set("near:gl11pa", {"storeId": 1234})
        args = Namespace(command="cache", cache_command="show", domain="locator")

        await _run(args, components)

        result = json.loads(capsys.readouterr().out)["result"]
        assert result == {
            "locator": [{"key": "near:gl11pa", "value": {"storeId": 1234}, "timestamp": None}]
        }

    @pytest.mark.asyncio
    async def test_cache_clear_all(self, capsys) -> None:
        components = _components()
        await components["locator_cache"].set("near:gl11pa", {"storeId": 1234})
        await components["product_cache"].set("page@sz:/products/product-12345", {})
        args = Namespace(command="cache", cache_command="clear", domain="all")

        exit_code = await _run(args, components)

        assert exit_code == 0
        assert await components["locator_cache"].entries() == []
        assert await components["product_cache"].entries() == []
        assert "Cleared locator, products cache" in capsys.readouterr().out
