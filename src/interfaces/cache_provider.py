"""Abstract base class for cache service providers.

Defines the key-value contract the store locator and product scraper use
to remember upstream results.  Implementations may keep entries in memory
or in a durable file; the adapters receive a provider through their
constructor and never know which one they hold.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from src.models.cache import CacheEntry


class ICacheProvider(ABC):
    """Contract for key-value cache services.

    Providers are TTL-agnostic: expiry is decided by callers, who store a
    ``{timestamp, value}`` envelope when they need one.  All operations are
    async so a file- or network-backed store can be used without blocking
    the event loop.
    """

    @abstractmethod
    async def load(self) -> None:
        """Read any previously persisted entries into the provider.

        Called once at startup.  Providers without durable storage treat
        this as a no-op.
        """

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Retrieve the value stored under *key*.

        Returns
        -------
        Any or None
            The cached value if present; ``None`` otherwise.
        """

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:
        """Store *value* under *key*, replacing (not merging) any previous value.

        Values must be JSON-compatible (dict, list, str, int, float, bool,
        None) so durable providers can persist them.
        """

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove the entry stored under *key*.  No-op if the key does not exist."""

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Return ``True`` if *key* is present in the cache."""

    @abstractmethod
    async def clear(self) -> None:
        """Remove every entry from the cache."""

    @abstractmethod
    async def persist(self) -> None:
        """Flush the current contents to durable storage.

        Callers invoke this after every mutation; there is no batching.
        """

    @abstractmethod
    async def entries(self) -> list[CacheEntry]:
        """Return a snapshot of all entries, with timestamps where the value carries one."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this cache provider."""
