"""Store locator adapter.

Finds the nearest Shoe Zone store for a city, postcode or coordinate pair
via the site's StoreLocator AJAX endpoint.  Results are cached forever
under a normalized query key; store details practically never change and
the cache file can be cleared by hand (``python -m src.cli cache clear``).
"""

from __future__ import annotations

import json

import structlog

from src.interfaces.cache_provider import ICacheProvider
from src.interfaces.upstream_client import IUpstreamClient
from src.models.store import Store
from src.models.upstream import LocatorEnvelope, RawStore, parse_envelope
from src.utils.concurrency import SingleFlight
from src.utils.errors import StoreNotFoundError, UnparseableResponseError
from src.utils.logging import get_logger
from src.utils.text_normalizer import (
    normalize_postcode,
    round_coordinate,
    strip_whitespace,
    title_case_words,
)

FIND_STORES_ENDPOINT = "/StoreLocator.aspx/FindRequestedStores"
CACHE_KEY_PREFIX = "near:"


def build_cache_key(
    lat: float | None = None,
    lon: float | None = None,
    city: str | None = None,
    postcode: str | None = None,
) -> str:
    """Return the cache key for a location query.

    Fields are joined in the fixed order lat, lon, city, postcode.  ``None``
    fields are left out entirely while empty strings are kept, so
    ``(51.5, -0.1, "", "")`` gives ``near:51.50,-0.10,,`` and
    ``(51.5, -0.1)`` gives ``near:51.50,-0.10``.  Coordinates are rounded
    to two decimals and postcodes lose their spaces, so equivalent queries
    written differently share one entry.

    Field names are not part of the key, so a lone field is ambiguous:
    ``city="GL1"`` and ``postcode="GL1"`` both give ``near:gl1``, and a
    lat-only query collides with a lon-only one of the same value.
    """
    parts: list[str] = []
    for coord in (lat, lon):
        if coord is not None:
            parts.append(f"{round_coordinate(coord):.2f}")
    if city is not None:
        parts.append(" ".join(city.split()))
    if postcode is not None:
        parts.append(normalize_postcode(postcode))
    return CACHE_KEY_PREFIX + ",".join(parts).lower()


def build_request_body(
    lat: float | None = None,
    lon: float | None = None,
    city: str | None = None,
    postcode: str | None = None,
) -> dict[str, str]:
    """Return the locator POST body; the query itself travels as a JSON string."""
    query = {
        "Town": (city or "").strip(),
        "PostCode": normalize_postcode(postcode),
        "Latitude": round_coordinate(lat),
        "Longitude": round_coordinate(lon),
        "StartDistance": 0,
        "NumberOfStores": 1,
    }
    return {"_sRequestJSON": json.dumps(query)}


def to_store(raw: RawStore) -> Store:
    """Map a raw locator candidate onto a :class:`Store`."""
    try:
        store_id = int(raw.key)
    except (TypeError, ValueError) as exc:
        raise UnparseableResponseError(
            message=f"Store key {raw.key!r} is not numeric",
            provider_name="store_locator",
        ) from exc

    return Store(
        store_name=title_case_words(raw.display_line1.strip()),
        store_id=store_id,
        store_address=f"{raw.premises}, {raw.street}, {raw.post_code}",
        store_phone=strip_whitespace(raw.telephone),
    )


class StoreLocator:
    """Resolve location queries to a single nearest :class:`Store`.

    The cache is injected so tests (and ``CACHE_BACKEND=memory``) can swap
    the durable JSON file for an in-memory store.
    """

    def __init__(self, client: IUpstreamClient, cache: ICacheProvider) -> None:
        self._client = client
        self._cache = cache
        self._single_flight: SingleFlight[Store] = SingleFlight()
        self._logger: structlog.BoundLogger = get_logger(__name__)

    async def locate_store(
        self,
        lat: float | None = None,
        lon: float | None = None,
        city: str | None = None,
        postcode: str | None = None,
    ) -> Store:
        """Return the store nearest to the given city, postcode or coordinates.

        At least one of *city*, *postcode* or the *lat*/*lon* pair should be
        given; missing coordinates are sent upstream as 0.

        Raises
        ------
        StoreNotFoundError
            The site reported no stores for the query (status 400).
        UpstreamUnavailableError
            The site could not be reached.
        UnparseableResponseError
            The reply did not have the expected shape.
        """
        key = build_cache_key(lat, lon, city, postcode)
        cached = await self._cache.get(key)
        if cached is not None:
            self._logger.debug("store_cache_hit", key=key)
            return Store.model_validate(cached)

        return await self._single_flight.run(
            key, lambda: self._fetch_and_cache(key, lat, lon, city, postcode)
        )

    async def _fetch_and_cache(
        self,
        key: str,
        lat: float | None,
        lon: float | None,
        city: str | None,
        postcode: str | None,
    ) -> Store:
        body = build_request_body(lat, lon, city, postcode)
        reply = await self._client.post_ajax(FIND_STORES_ENDPOINT, body)
        payload = parse_envelope(LocatorEnvelope, reply, "store_locator").decode()

        if not payload.stores:
            if payload.error_msg:
                self._logger.info("store_not_found", key=key, upstream_message=payload.error_msg)
                raise StoreNotFoundError(message=payload.error_msg, provider_name="store_locator")
            raise UnparseableResponseError(
                message="Store locator returned no stores and no error message",
                provider_name="store_locator",
            )

        store = to_store(payload.stores[0])
        await self._cache.set(key, store.model_dump(mode="json", by_alias=True))
        await self._cache.persist()

        self._logger.info("store_located", key=key, store_id=store.store_id)
        return store
