"""Abstract base class for the retail site transport.

The client issues requests and hands back raw bodies: decoded JSON for
the AJAX endpoints, text for HTML pages.  It knows nothing about caching
or about what the bodies mean.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class IUpstreamClient(ABC):
    """Contract for talking to the retail site."""

    @abstractmethod
    async def post_ajax(self, endpoint: str, body: dict[str, Any]) -> Any:
        """POST *body* as JSON to an AJAX *endpoint* and return the decoded JSON reply.

        Parameters
        ----------
        endpoint:
            Path relative to the API URL, e.g. ``/StoreLocator.aspx/FindRequestedStores``.
        body:
            JSON-serialisable request body.

        Raises
        ------
        src.utils.errors.UpstreamUnavailableError
            On transport failure or a non-2xx status.
        src.utils.errors.UnparseableResponseError
            If the reply is not JSON.
        """

    @abstractmethod
    async def fetch_page(self, path: str) -> str:
        """GET the HTML document at *path* (relative to the site URL).

        Raises
        ------
        src.utils.errors.UpstreamUnavailableError
            On transport failure or a non-2xx status; ``upstream_status``
            carries the status the site answered with.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this client."""
