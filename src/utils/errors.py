"""Custom exception hierarchy for the Shoe Zone proxy.

All application exceptions inherit from :class:`ShoeZoneProxyError`, which
carries a human-readable ``message``, an optional ``provider_name`` naming
the component that failed (e.g. "shoezone_client", "json_file_cache") and an
HTTP-style ``status_code`` that the API layer maps straight onto the response.

    ShoeZoneProxyError  (base -- status 500)
    +-- UpstreamUnavailableError  (transport failure talking to the site, 502)
    +-- StoreNotFoundError        (locator reports zero stores, 400)
    +-- ProductNotFoundError      (product page does not exist, 404)
    +-- UnparseableResponseError  (reply no longer matches the expected layout)
    +-- ProductUnavailableError   (stock reply lacks the confirming field)
    +-- CacheIOError              (durable cache read/write failure)
    +-- ConfigurationError        (startup / missing config)

Nothing in the core retries.  Every failure is raised once and reported to
the caller as a status code plus a message, never as a partial record.
"""

from __future__ import annotations


class ShoeZoneProxyError(Exception):
    """Base exception for all proxy errors.

    The ``__str__`` method prefixes the provider name in brackets for
    structured log output, e.g. ``[shoezone_client] Connection refused``.
    The ``message`` property stays unprefixed because it is what callers
    see in the response envelope.
    """

    default_status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        self._status_code = status_code or self.default_status_code
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    @property
    def status_code(self) -> int:
        return self._status_code

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Upstream errors
# ---------------------------------------------------------------------------

class UpstreamUnavailableError(ShoeZoneProxyError):
    """Raised when the retail site cannot be reached or answers with an error status.

    ``upstream_status`` holds the HTTP status the site replied with, or
    ``None`` when the request never got a response (DNS, timeout, reset).
    """

    default_status_code = 502

    def __init__(
        self,
        message: str = "Upstream service is unavailable",
        provider_name: str | None = None,
        status_code: int | None = None,
        upstream_status: int | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name, status_code=status_code)
        self._upstream_status = upstream_status

    @property
    def upstream_status(self) -> int | None:
        return self._upstream_status


class StoreNotFoundError(ShoeZoneProxyError):
    """Raised when the store locator explicitly reports no matching stores.

    The message is the one the site returned, so it is safe to show users.
    """

    default_status_code = 400

    def __init__(
        self,
        message: str = "No stores found",
        provider_name: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name, status_code=status_code)


class ProductNotFoundError(ShoeZoneProxyError):
    """Raised when the product page for a style code does not exist."""

    default_status_code = 404

    def __init__(
        self,
        message: str = "Product not found",
        provider_name: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name, status_code=status_code)


class UnparseableResponseError(ShoeZoneProxyError):
    """Raised when an upstream reply no longer matches the structure we scrape.

    Usually means the site changed its markup or payload format.
    """

    def __init__(
        self,
        message: str = "Upstream response could not be parsed",
        provider_name: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name, status_code=status_code)


class ProductUnavailableError(UnparseableResponseError):
    """Raised when a stock reply lacks the store stock block.

    The site answers 200 even for invalid style/size combinations, so this
    cannot be told apart from a real not-found.
    """

    def __init__(
        self,
        message: str = "Product unavailable",
        provider_name: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name, status_code=status_code)


# ---------------------------------------------------------------------------
# Storage / configuration errors
# ---------------------------------------------------------------------------

class CacheIOError(ShoeZoneProxyError):
    """Raised when a cache file cannot be read or written."""

    def __init__(
        self,
        message: str = "Cache storage failure",
        provider_name: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name, status_code=status_code)


class ConfigurationError(ShoeZoneProxyError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name, status_code=status_code)
