"""Utility modules for the Shoe Zone proxy.

- **concurrency** -- per-key single-flight helper that collapses concurrent
  cache misses into one upstream request.
- **errors** -- exception hierarchy rooted at ShoeZoneProxyError; every
  error carries the HTTP status the API layer should answer with.
- **logging** -- structlog setup with console output in development and
  JSON in production.
- **offer_abbreviator** -- turns offer titles into short codes ("BOGOF").
- **text_normalizer** -- title-casing, whitespace stripping, postcode and
  coordinate normalization.
"""

from src.utils.concurrency import SingleFlight
from src.utils.errors import (
    CacheIOError,
    ConfigurationError,
    ProductNotFoundError,
    ProductUnavailableError,
    ShoeZoneProxyError,
    StoreNotFoundError,
    UnparseableResponseError,
    UpstreamUnavailableError,
)
from src.utils.logging import configure_logging, get_logger
from src.utils.offer_abbreviator import abbreviate
from src.utils.text_normalizer import (
    normalize_postcode,
    round_coordinate,
    strip_whitespace,
    title_case_words,
)

__all__ = [
    "CacheIOError",
    "ConfigurationError",
    "ProductNotFoundError",
    "ProductUnavailableError",
    "ShoeZoneProxyError",
    "SingleFlight",
    "StoreNotFoundError",
    "UnparseableResponseError",
    "UpstreamUnavailableError",
    "abbreviate",
    "configure_logging",
    "get_logger",
    "normalize_postcode",
    "round_coordinate",
    "strip_whitespace",
    "title_case_words",
]
