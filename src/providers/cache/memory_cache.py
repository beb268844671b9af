"""In-memory cache provider using an unbounded cachetools.Cache.

Nothing is written to disk, so entries vanish when the process exits.
Used for ephemeral deployments (``CACHE_BACKEND=memory``) and as the fake
backend in tests.
"""

from __future__ import annotations

import math
from typing import Any

import structlog
from cachetools import Cache

from src.interfaces.cache_provider import ICacheProvider
from src.models.cache import CacheEntry

logger = structlog.get_logger(logger_name=__name__)


class MemoryCacheProvider(ICacheProvider):
    """In-memory cache backed by an unbounded ``cachetools.Cache``.

    Entries are never evicted; like the file backend they stay until
    deleted or cleared.

    Parameters
    ----------
    name:
        Domain name used in log lines (e.g. ``"store-locator-api"``).
    """

    def __init__(self, name: str = "memory") -> None:
        self._name = name
        self._cache: Cache[str, Any] = Cache(maxsize=math.inf)

    # ------------------------------------------------------------------
    # ICacheProvider implementation
    # ------------------------------------------------------------------

    async def load(self) -> None:
        """Nothing to load; memory caches always start empty."""

    async def get(self, key: str) -> Any | None:
        """Retrieve the cached value for *key*, or ``None`` if missing."""
        value = self._cache.get(key)
        if value is not None:
            logger.debug("cache_hit", cache=self._name, key=key)
        else:
            logger.debug("cache_miss", cache=self._name, key=key)
        return value

    async def set(self, key: str, value: Any) -> None:
        self._cache[key] = value
        logger.debug("cache_set", cache=self._name, key=key)

    async def delete(self, key: str) -> None:
        """Remove *key* from the cache (no-op if absent)."""
        self._cache.pop(key, None)
        logger.debug("cache_delete", cache=self._name, key=key)

    async def exists(self, key: str) -> bool:
        return key in self._cache

    async def clear(self) -> None:
        self._cache.clear()
        logger.info("cache_cleared", cache=self._name)

    async def persist(self) -> None:
        """No durable storage behind this provider."""

    async def entries(self) -> list[CacheEntry]:
        return [CacheEntry.from_value(key, value) for key, value in list(self._cache.items())]

    def get_provider_name(self) -> str:
        return "memory_cache"
