"""Shoe Zone website client built on httpx.

Talks to two kinds of upstream resources:

- ASP.NET AJAX endpoints under the API URL (store locator, stock checker),
  which accept a JSON POST and reject requests without an ``Origin``
  header matching the site.
- Plain HTML product pages under the site URL.

Failures are raised immediately as :class:`UpstreamUnavailableError`;
nothing here retries.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import urlsplit

import httpx
import structlog

from src.interfaces.upstream_client import IUpstreamClient
from src.utils.errors import UnparseableResponseError, UpstreamUnavailableError

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_TIMEOUT = 30.0
_DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; shoezone-proxy/0.1)",
    "Accept": "text/html,application/xhtml+xml,application/json;q=0.9,*/*;q=0.8",
}


def _origin_of(url: str) -> str:
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}"


class ShoeZoneClient(IUpstreamClient):
    """Upstream transport for the Shoe Zone website.

    The ``httpx.AsyncClient`` is injected for testability; when omitted the
    client creates (and owns) its own.
    """

    def __init__(
        self,
        api_url: str,
        site_url: str,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = _DEFAULT_TIMEOUT,
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self._site_url = site_url.rstrip("/")
        self._origin = _origin_of(self._api_url)
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers=_DEFAULT_HEADERS,
            follow_redirects=True,
        )

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise UpstreamUnavailableError(
                message=f"Timeout contacting {url}",
                provider_name=self.get_provider_name(),
            ) from exc
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise UpstreamUnavailableError(
                message=f"HTTP {status} from {url}",
                provider_name=self.get_provider_name(),
                upstream_status=status,
            ) from exc
        except httpx.HTTPError as exc:
            raise UpstreamUnavailableError(
                message=f"HTTP error contacting {url}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        return response

    # ------------------------------------------------------------------
    # IUpstreamClient implementation
    # ------------------------------------------------------------------

    async def post_ajax(self, endpoint: str, body: dict[str, Any]) -> Any:
        url = f"{self._api_url}{endpoint}"
        response = await self._send("POST", url, json=body, headers={"Origin": self._origin})
        try:
            data = response.json()
        except ValueError as exc:
            raise UnparseableResponseError(
                message=f"Non-JSON reply from {endpoint}",
                provider_name=self.get_provider_name(),
            ) from exc
        logger.debug("upstream_ajax", endpoint=endpoint, status=response.status_code)
        return data

    async def fetch_page(self, path: str) -> str:
        url = f"{self._site_url}{path}"
        response = await self._send("GET", url)
        logger.info("upstream_page_fetched", path=path, bytes=len(response.content))
        return response.text

    async def aclose(self) -> None:
        """Close the underlying httpx client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    def get_provider_name(self) -> str:
        return "shoezone_client"
