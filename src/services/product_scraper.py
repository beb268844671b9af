"""Product page scraper.

There is no product API, so product details come from the public product
page.  The page's schema.org ``itemprop`` attributes give the SKU, name
and price; the size selector, breadcrumbs and offer badges are located by
the site's own ids and layout classes.  Those layout selectors are the
part most likely to break when the site is redesigned, in which case the
scraper raises :class:`UnparseableResponseError` rather than returning a
half-filled product.

Parsed products (not raw HTML) are cached per page path for a short TTL,
so bursts of requests for the same style hit the site once.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Callable

import structlog
from pydantic import ValidationError

from src.interfaces.cache_provider import ICacheProvider
from src.interfaces.html_parser import IHtmlDocument, IHtmlElement, IHtmlParser
from src.interfaces.upstream_client import IUpstreamClient
from src.models.cache import TimestampedValue, now_ms
from src.models.product import Offer, Price, Product, SizeEntry, SizeStock
from src.utils.concurrency import SingleFlight
from src.utils.errors import (
    ProductNotFoundError,
    UnparseableResponseError,
    UpstreamUnavailableError,
)
from src.utils.logging import get_logger
from src.utils.offer_abbreviator import abbreviate

PAGE_CACHE_PREFIX = "page@sz:"
DEFAULT_PAGE_TTL_MS = 60_000

_SIZE_CODE_LENGTH = 3
_MIN_STYLE_LENGTH = 5

_SKU_SELECTOR = '[itemprop="sku"]'
_NAME_SELECTOR = '[itemprop="name"]'
_PRICE_SELECTOR = '[itemprop="price"]'
_CURRENCY_SELECTOR = '[itemprop="priceCurrency"]'
_THUMBNAIL_SELECTOR = "#main-image-0"
_BREADCRUMB_SELECTOR = "#bread-crumbs .breadcrumb"
_SIZE_SELECTOR = "#divSizeSelector li[data-id][data-qty]"
_OFFER_SELECTOR = "#divProdRightDT .grid:first-child .grid__col:last-child .float-right a[href][title]"


def base_style_code(style_code: str) -> str:
    """Strip an embedded size code from *style_code*.

    Style codes used to be 5 digits and are now up to 6; anything that
    still leaves at least 5 characters after removing 3 is treated as
    style + size code ("12345678" -> "12345", "12345" unchanged).
    """
    style_code = style_code.strip()
    if len(style_code) - _SIZE_CODE_LENGTH >= _MIN_STYLE_LENGTH:
        return style_code[:-_SIZE_CODE_LENGTH]
    return style_code


def product_path(style_code: str) -> str:
    return f"/Products/Product-{base_style_code(style_code)}"


def page_cache_key(path: str) -> str:
    return PAGE_CACHE_PREFIX + path.lower()


# ---------------------------------------------------------------------------
# Extraction helpers
# ---------------------------------------------------------------------------


def _format_error(what: str) -> UnparseableResponseError:
    return UnparseableResponseError(
        message=f"Product page format changed: {what}",
        provider_name="product_scraper",
    )


def _require(doc: IHtmlDocument | IHtmlElement, selector: str) -> IHtmlElement:
    element = doc.select_one(selector)
    if element is None:
        raise _format_error(f"no element matches {selector!r}")
    return element


def _require_attr(element: IHtmlElement, attribute: str, selector: str) -> str:
    value = element.get(attribute)
    if value is None:
        raise _format_error(f"{selector!r} has no {attribute!r} attribute")
    return value


def _to_int(raw: str, what: str) -> int:
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise _format_error(f"{what} {raw!r} is not an integer") from exc


def _to_decimal(raw: str, what: str) -> Decimal:
    try:
        return Decimal(raw.strip())
    except InvalidOperation as exc:
        raise _format_error(f"{what} {raw!r} is not a number") from exc


def parse_product(doc: IHtmlDocument, ignored_offers: frozenset[str] = frozenset()) -> Product:
    """Extract a :class:`Product` from a parsed product page.

    Offer badges whose title equals (case-insensitively) an entry in
    *ignored_offers* are left out.  Matching is exact: "Memory Foam
    Cushioning" is kept even if "memory foam insoles" is ignored.
    """
    price_el = _require(doc, _PRICE_SELECTOR)
    currency_el = _require(doc, _CURRENCY_SELECTOR)
    thumbnail_el = _require(doc, _THUMBNAIL_SELECTOR)

    size_range: list[SizeEntry] = []
    for size_el in doc.select(_SIZE_SELECTOR):
        data_id = _require_attr(size_el, "data-id", _SIZE_SELECTOR).strip()
        size_range.append(
            SizeEntry(
                size=size_el.text.strip().upper(),
                stock=SizeStock(
                    warehouse=_to_int(_require_attr(size_el, "data-qty", _SIZE_SELECTOR), "data-qty")
                ),
                code=data_id[-_SIZE_CODE_LENGTH:],
            )
        )

    offers: list[Offer] = []
    for offer_el in doc.select(_OFFER_SELECTOR):
        title = _require_attr(offer_el, "title", _OFFER_SELECTOR)
        offer_name = title.strip()
        if offer_name.lower() in ignored_offers:
            continue
        image_el = _require(offer_el, "img")
        offers.append(
            Offer(
                name=offer_name,
                image=_require_attr(image_el, "src", "img"),
                abbr=abbreviate(title),
            )
        )

    sku = _to_int(_require(doc, _SKU_SELECTOR).text, "SKU")
    name = _require(doc, _NAME_SELECTOR).text.strip()
    price = _to_decimal(_require_attr(price_el, "content", _PRICE_SELECTOR), "price")
    currency = _require_attr(currency_el, "content", _CURRENCY_SELECTOR).strip().upper()

    try:
        return Product(
            id=sku,
            name=name,
            price=Price(current=price),
            currency=currency,
            thumbnail=_require_attr(thumbnail_el, "src", _THUMBNAIL_SELECTOR),
            categories=[crumb.text.strip() for crumb in doc.select(_BREADCRUMB_SELECTOR)],
            size_range=size_range,
            offers=offers,
        )
    except ValidationError as exc:
        raise _format_error(str(exc)) from exc


class ProductScraper:
    """Fetch, parse and cache product pages.

    Parameters
    ----------
    client:
        Upstream transport used to GET the product page.
    parser:
        HTML parsing engine.
    cache:
        Page cache domain; entries are ``{timestamp, value}`` envelopes.
    ignored_offers:
        Lower-cased offer titles to drop from results.
    page_ttl_ms:
        How long a parsed page stays fresh.
    clock:
        Returns "now" in epoch milliseconds; injectable for tests.
    """

    def __init__(
        self,
        client: IUpstreamClient,
        parser: IHtmlParser,
        cache: ICacheProvider,
        ignored_offers: frozenset[str] = frozenset(),
        page_ttl_ms: int = DEFAULT_PAGE_TTL_MS,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._client = client
        self._parser = parser
        self._cache = cache
        self._ignored_offers = frozenset(name.lower() for name in ignored_offers)
        self._page_ttl_ms = page_ttl_ms
        self._clock = clock
        self._single_flight: SingleFlight[Product] = SingleFlight()
        self._logger: structlog.BoundLogger = get_logger(__name__)

    async def get_product_info(self, style_code: str, store_id: int | None = None) -> Product:
        """Return the product for *style_code*.

        *store_id* is accepted for forward compatibility but ignored: the
        product page only lists warehouse stock, never per-store levels.

        Raises
        ------
        ProductNotFoundError
            The site has no page for the style (status 404).
        UnparseableResponseError
            The page no longer matches the expected layout.
        UpstreamUnavailableError
            The site could not be reached.
        """
        path = product_path(style_code)
        key = page_cache_key(path)
        self._logger.debug("product_requested", style_code=style_code, store_id=store_id)

        cached = await self._cache.get(key)
        if cached is not None:
            entry = TimestampedValue.model_validate(cached)
            if entry.is_fresh(self._page_ttl_ms, now=self._clock()):
                self._logger.debug("product_cache_hit", key=key)
                return Product.model_validate(entry.value)
            self._logger.debug("product_cache_expired", key=key)

        return await self._single_flight.run(key, lambda: self._fetch_and_cache(key, path))

    async def _fetch_and_cache(self, key: str, path: str) -> Product:
        try:
            html = await self._client.fetch_page(path)
        except UpstreamUnavailableError as exc:
            if exc.upstream_status == 404:
                raise ProductNotFoundError(
                    message=f"No product page at {path}",
                    provider_name="product_scraper",
                ) from exc
            raise

        product = parse_product(self._parser.parse(html), self._ignored_offers)

        entry = TimestampedValue(
            timestamp=self._clock(),
            value=product.model_dump(mode="json", by_alias=True),
        )
        await self._cache.set(key, entry.model_dump(mode="json"))
        await self._cache.persist()

        self._logger.info(
            "product_scraped",
            path=path,
            product_id=product.id,
            sizes=len(product.size_range),
            offers=len(product.offers),
        )
        return product
