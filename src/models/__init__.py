"""Domain models: re-exports all public model classes.

Submodules by concern:
    - cache.py   : cache entries and the ``{timestamp, value}`` TTL envelope
    - product.py : Product, Price, SizeEntry, SizeStock, Offer
    - store.py   : Store and StockCheckResult
    - upstream.py: envelopes and payloads of the site's AJAX endpoints
"""

from __future__ import annotations

from src.models.cache import CacheEntry, TimestampedValue, now_ms
from src.models.product import Offer, Price, Product, SizeEntry, SizeStock
from src.models.store import StockCheckResult, Store
from src.models.upstream import (
    LocatorEnvelope,
    LocatorPayload,
    RawStore,
    RawStoreStock,
    StockEnvelope,
    StockPayload,
)

__all__ = [
    "CacheEntry",
    "LocatorEnvelope",
    "LocatorPayload",
    "Offer",
    "Price",
    "Product",
    "RawStore",
    "RawStoreStock",
    "SizeEntry",
    "SizeStock",
    "StockCheckResult",
    "StockEnvelope",
    "StockPayload",
    "Store",
    "TimestampedValue",
    "now_ms",
]
