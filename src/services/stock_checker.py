"""Store stock checker adapter.

Asks the site whether one store can supply a given quantity of one
style/size.  The site only answers yes or no, so quantities cannot be
read back; probing with rising quantities would hammer the site and is
deliberately not done.

Stock is live data: nothing here is cached.
"""

from __future__ import annotations

import json

import structlog

from src.interfaces.upstream_client import IUpstreamClient
from src.models.store import StockCheckResult
from src.models.upstream import RawStoreStock, StockEnvelope, parse_envelope
from src.utils.errors import ProductUnavailableError, UnparseableResponseError
from src.utils.logging import get_logger

STORE_STOCK_ENDPOINT = "/Product.aspx/StoreStockAjaxRequest"


def _field(value: str) -> dict[str, str]:
    return {"val": value, "err": ""}


def build_request_body(style_code: str, size: str, store_id: int | str, quantity: int) -> dict[str, str]:
    """Return the stock POST body.

    Every field is wrapped as ``{"val": ..., "err": ""}`` and the whole
    form travels as a JSON string under ``data``.  ``_prod_hasStockInWH``
    must be sent as "true" or the endpoint refuses the request.
    """
    form = {
        "_prod_CCStoreNo": _field(str(store_id)),
        "_prod_SizeId": _field(f"{style_code}{size}"),
        "_prod_Qty": _field(str(quantity)),
        "_prod_hasStockInWH": _field("true"),
        "_prod_Action": _field("getStoreStock"),
    }
    return {"data": json.dumps(form)}


def to_stock_result(raw: RawStoreStock) -> StockCheckResult:
    try:
        store_id = int(raw.store_no)
    except (TypeError, ValueError) as exc:
        raise UnparseableResponseError(
            message=f"Store number {raw.store_no!r} is not numeric",
            provider_name="stock_checker",
        ) from exc

    return StockCheckResult(
        in_stock=raw.has_stock,
        store_name=raw.store_name,
        store_id=store_id,
        store_address=raw.store_address,
    )


class StockChecker:
    """Check one store's stock for one style/size at a time."""

    def __init__(self, client: IUpstreamClient) -> None:
        self._client = client
        self._logger: structlog.BoundLogger = get_logger(__name__)

    async def check_store_stock(
        self,
        style_code: str,
        size: str,
        store_id: int | str,
        quantity: int | None = 1,
    ) -> StockCheckResult:
        """Return whether *store_id* has *quantity* of *style_code* in *size*.

        Parameters
        ----------
        style_code:
            Base style code (without size suffix).
        size:
            3-character size code.
        store_id:
            Upstream store number.
        quantity:
            Units wanted; ``None`` or 0 fall back to 1.

        Raises
        ------
        ProductUnavailableError
            The reply carried no stock block, which is how the site answers
            an invalid style/size combination.
        UpstreamUnavailableError
            The site could not be reached.
        """
        quantity = quantity or 1
        body = build_request_body(style_code, size, store_id, quantity)
        reply = await self._client.post_ajax(STORE_STOCK_ENDPOINT, body)
        payload = parse_envelope(StockEnvelope, reply, "stock_checker").decode()

        if payload.store_stock is None:
            self._logger.info(
                "stock_product_unavailable",
                style_code=style_code,
                size=size,
                store_id=store_id,
            )
            raise ProductUnavailableError(provider_name="stock_checker")

        result = to_stock_result(payload.store_stock)
        self._logger.info(
            "stock_checked",
            style_code=style_code,
            size=size,
            store_id=result.store_id,
            quantity=quantity,
            in_stock=result.in_stock,
        )
        return result
