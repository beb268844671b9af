"""Wire models for the retail site's ASP.NET AJAX endpoints.

Both endpoints wrap their real payload as a JSON *string* inside a JSON
reply, so decoding is always two stages:

1. Validate the outer reply into an envelope model (``LocatorEnvelope`` or
   ``StockEnvelope``).  This only proves the wrapper is intact.
2. Call ``envelope.decode()`` to parse the nested string into the typed
   payload.

Either stage failing means the site changed its format and raises
:class:`~src.utils.errors.UnparseableResponseError`.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from src.utils.errors import UnparseableResponseError


def _decode_nested(raw: str, source: str) -> Any:
    try:
        return json.loads(raw)
    except (TypeError, json.JSONDecodeError) as exc:
        raise UnparseableResponseError(
            message=f"{source} payload is not valid JSON",
            provider_name=source,
        ) from exc


def parse_envelope(model: type[BaseModel], body: Any, source: str) -> Any:
    """Validate an outer reply *body* against the envelope *model*."""
    try:
        return model.model_validate(body)
    except ValidationError as exc:
        raise UnparseableResponseError(
            message=f"Unexpected {source} reply format",
            provider_name=source,
        ) from exc


# ---------------------------------------------------------------------------
# Store locator
# ---------------------------------------------------------------------------


class RawStore(BaseModel):
    """A store candidate exactly as the locator returns it."""

    model_config = ConfigDict(extra="ignore")

    display_line1: str = Field(alias="DisplayLine1")
    key: int | str = Field(alias="Key")
    premises: str = Field(default="", alias="Property")
    street: str = Field(default="", alias="Street")
    post_code: str = Field(default="", alias="PostCode")
    telephone: str = Field(default="", alias="Telephone")


class LocatorPayload(BaseModel):
    """Decoded store locator payload."""

    model_config = ConfigDict(extra="ignore")

    stores: list[RawStore] | None = Field(default=None, alias="Stores")
    error_msg: str | None = Field(default=None, alias="ErrorMsg")


class LocatorEnvelope(BaseModel):
    """Outer locator reply: ``{"d": "<stringified LocatorPayload>"}``."""

    model_config = ConfigDict(extra="ignore")

    d: str

    def decode(self) -> LocatorPayload:
        data = _decode_nested(self.d, "store_locator")
        return parse_envelope(LocatorPayload, data, "store_locator")


# ---------------------------------------------------------------------------
# Stock checker
# ---------------------------------------------------------------------------


class RawStoreStock(BaseModel):
    """The ``_prod_sNo_Stock`` block of a stock reply."""

    model_config = ConfigDict(extra="ignore")

    has_stock: bool = Field(alias="HasStock")
    store_name: str = Field(alias="StoreName")
    store_no: int | str = Field(alias="StoreNo")
    store_address: str = Field(default="", alias="StoreAddress")


class StockPayload(BaseModel):
    """Decoded stock payload.

    ``store_stock`` is ``None`` when the style/size combination is invalid;
    the site still replies 200 in that case.
    """

    model_config = ConfigDict(extra="ignore")

    store_stock: RawStoreStock | None = Field(default=None, alias="_prod_sNo_Stock")


class StockEnvelopeBody(BaseModel):
    model_config = ConfigDict(extra="ignore")

    data: str


class StockEnvelope(BaseModel):
    """Outer stock reply: ``{"d": {"data": "<stringified StockPayload>"}}``."""

    model_config = ConfigDict(extra="ignore")

    d: StockEnvelopeBody

    def decode(self) -> StockPayload:
        data = _decode_nested(self.d.data, "stock_checker")
        return parse_envelope(StockPayload, data, "stock_checker")
