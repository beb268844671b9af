"""Unit tests for the exception hierarchy."""

from __future__ import annotations

import pytest

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


class TestErrorHierarchy:
    @pytest.mark.parametrize(
        ("error_cls", "status"),
        [
            (ShoeZoneProxyError, 500),
            (UpstreamUnavailableError, 502),
            (StoreNotFoundError, 400),
            (ProductNotFoundError, 404),
            (UnparseableResponseError, 500),
            (ProductUnavailableError, 500),
            (CacheIOError, 500),
            (ConfigurationError, 500),
        ],
    )
    def test_default_status_codes(self, error_cls, status) -> None:
        error = error_cls()
        assert error.status_code == status
        assert isinstance(error, ShoeZoneProxyError)

    def test_explicit_status_code_wins(self) -> None:
        assert ShoeZoneProxyError("bad input", status_code=400).status_code == 400

    def test_str_prefixes_provider(self) -> None:
        error = UpstreamUnavailableError("Connection refused", provider_name="shoezone_client")
        assert str(error) == "[shoezone_client] Connection refused"
        assert error.message == "Connection refused"

    def test_str_without_provider(self) -> None:
        assert str(StoreNotFoundError("No stores found")) == "No stores found"

    def test_upstream_status(self) -> None:
        assert UpstreamUnavailableError(upstream_status=404).upstream_status == 404
        assert UpstreamUnavailableError().upstream_status is None
