"""CLI for querying the Shoe Zone proxy services without the web server.

Usage::

    python -m src.cli locate --postcode "GL1 1AA"
    python -m src.cli locate --lat 51.5 --lon -0.1
    python -m src.cli stock 12345 060 --store-id 1234 --quantity 2
    python -m src.cli product 12345678
    python -m src.cli cache show locator
    python -m src.cli cache clear all

Every command prints the same ``{"ok": ..., "result": ...}`` envelope the
HTTP API returns, on stdout.  Log lines go to stderr so the output can be
piped straight into ``jq``.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

from src.api.schemas import failure, success
from src.utils.errors import ShoeZoneProxyError

_CACHE_DOMAINS = {"locator": "locator_cache", "products": "product_cache"}


def _print_envelope(envelope: dict[str, Any]) -> None:
    print(json.dumps(envelope, indent=2, ensure_ascii=False))


def _load_components() -> dict[str, Any]:
    """Build the service graph with logging routed to stderr.

    ``src.main`` configures logging at import time, so the stderr setup
    has to run after the import and before anything logs.
    """
    from src.main import build_services, settings
    from src.utils.logging import configure_logging

    configure_logging(log_level=settings.log_level, stream=sys.stderr)
    return build_services()


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


async def _handle_locate(args: argparse.Namespace, components: dict[str, Any]) -> Any:
    if not any((args.city, args.postcode, args.lat is not None and args.lon is not None)):
        raise ShoeZoneProxyError(
            message="Provide --city, --postcode, or both --lat and --lon",
            status_code=400,
        )
    await components["locator_cache"].load()
    return await components["store_locator"].locate_store(
        lat=args.lat, lon=args.lon, city=args.city, postcode=args.postcode
    )


async def _handle_stock(args: argparse.Namespace, components: dict[str, Any]) -> Any:
    return await components["stock_checker"].check_store_stock(
        style_code=args.style_code,
        size=args.size,
        store_id=args.store_id,
        quantity=args.quantity,
    )


async def _handle_product(args: argparse.Namespace, components: dict[str, Any]) -> Any:
    await components["product_cache"].load()
    return await components["product_scraper"].get_product_info(
        args.style_code, store_id=args.store_id
    )


async def _handle_cache(args: argparse.Namespace, components: dict[str, Any]) -> Any:
    domains = list(_CACHE_DOMAINS) if args.domain == "all" else [args.domain]

    if args.cache_command == "show":
        listing: dict[str, Any] = {}
        for domain in domains:
            cache = components[_CACHE_DOMAINS[domain]]
            await cache.load()
            listing[domain] = [
                entry.model_dump(mode="json") for entry in await cache.entries()
            ]
        return listing

    cleared = []
    for domain in domains:
        cache = components[_CACHE_DOMAINS[domain]]
        await cache.load()
        await cache.clear()
        await cache.persist()
        cleared.append(domain)
    return f"Cleared {', '.join(cleared)} cache"


_HANDLERS = {
    "locate": _handle_locate,
    "stock": _handle_stock,
    "product": _handle_product,
    "cache": _handle_cache,
}


async def _run(args: argparse.Namespace, components: dict[str, Any]) -> int:
    """Run one command and print its envelope.  Returns the exit code."""
    handler = _HANDLERS[args.command]
    try:
        result = await handler(args, components)
    except ShoeZoneProxyError as exc:
        _print_envelope(failure(exc.message))
        print(f"Error ({exc.status_code}): {exc}", file=sys.stderr)
        return 1
    finally:
        await components["upstream_client"].aclose()

    _print_envelope(success(result))
    return 0


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the query CLI."""
    parser = argparse.ArgumentParser(
        prog="python -m src.cli",
        description="Query Shoe Zone stores, stock and products from the command line.",
    )
    subparsers = parser.add_subparsers(dest="command", help="Query commands")

    # -- locate --
    locate_parser = subparsers.add_parser("locate", help="Find the nearest store")
    locate_parser.add_argument("--city", default=None, help="Town or city name")
    locate_parser.add_argument("--postcode", default=None, help="UK postcode")
    locate_parser.add_argument("--lat", type=float, default=None, help="Latitude")
    locate_parser.add_argument("--lon", type=float, default=None, help="Longitude")

    # -- stock --
    stock_parser = subparsers.add_parser(
        "stock", help="Check a store's stock for one style and size"
    )
    stock_parser.add_argument("style_code", help="Product style code (e.g. 12345)")
    stock_parser.add_argument("size", help="3-character size code (e.g. 060)")
    stock_parser.add_argument("--store-id", type=int, required=True, help="Store number")
    stock_parser.add_argument(
        "--quantity", type=int, default=1, help="Units wanted (default: 1)"
    )

    # -- product --
    product_parser = subparsers.add_parser("product", help="Scrape a product page")
    product_parser.add_argument("style_code", help="Style code, optionally with size suffix")
    product_parser.add_argument(
        "--store-id", type=int, default=None, help="Store number (accepted, not used yet)"
    )

    # -- cache --
    cache_parser = subparsers.add_parser("cache", help="Inspect or clear the cache files")
    cache_parser.add_argument("cache_command", choices=["show", "clear"])
    cache_parser.add_argument(
        "domain",
        nargs="?",
        default="all",
        choices=[*_CACHE_DOMAINS, "all"],
        help="Which cache to act on (default: all)",
    )

    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the query tool."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    try:
        components = _load_components()
    except ShoeZoneProxyError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    exit_code = asyncio.run(_run(args, components))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
