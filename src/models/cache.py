"""Cache entry model shared by the cache providers."""

from __future__ import annotations

import time
from typing import Any

from pydantic import BaseModel, ConfigDict


def now_ms() -> int:
    """Milliseconds since the epoch, the timestamp unit used in cache entries."""
    return int(time.time() * 1000)


class CacheEntry(BaseModel):
    """A key/value pair held by a cache provider.

    ``timestamp`` is only set when the caller supplies one; the stores
    themselves know nothing about expiry.
    """

    model_config = ConfigDict(frozen=True)

    key: str
    value: Any
    timestamp: int | None = None

    @classmethod
    def from_value(cls, key: str, value: Any) -> CacheEntry:
        """Build an entry, lifting ``timestamp`` out of a ``{timestamp, value}`` envelope."""
        timestamp = None
        if isinstance(value, dict) and isinstance(value.get("timestamp"), int):
            timestamp = value["timestamp"]
        return cls(key=key, value=value, timestamp=timestamp)


class TimestampedValue(BaseModel):
    """Envelope stored by callers that apply a TTL: ``{timestamp, value}``."""

    model_config = ConfigDict(frozen=True)

    timestamp: int
    value: Any

    def is_fresh(self, ttl_ms: int, now: int | None = None) -> bool:
        """Return ``True`` if the entry is younger than *ttl_ms*."""
        current = now_ms() if now is None else now
        return current - self.timestamp < ttl_ms
