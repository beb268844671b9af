"""Pydantic response schemas for the proxy API.

Every endpoint answers with the same envelope::

    {"ok": true,  "result": <record>}      # success
    {"ok": false, "result": "<message>"}   # failure, with the error's status code

Clients check ``ok`` before reading ``result``; the HTTP status mirrors it.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from src.models.product import Product
from src.models.store import StockCheckResult, Store


class ApiResponse(BaseModel):
    """Generic success/failure envelope."""

    ok: bool
    result: Any = None


class StoreResponse(ApiResponse):
    result: Store


class StockResponse(ApiResponse):
    result: StockCheckResult


class ProductResponse(ApiResponse):
    result: Product


class ErrorResponse(ApiResponse):
    """Failure envelope; ``result`` holds a human-readable message."""

    ok: bool = False
    result: str


def success(record: BaseModel | str) -> dict[str, Any]:
    """Wrap *record* in a success envelope using its camelCase JSON form."""
    if isinstance(record, BaseModel):
        return {"ok": True, "result": record.model_dump(mode="json", by_alias=True)}
    return {"ok": True, "result": record}


def failure(message: str) -> dict[str, Any]:
    return ErrorResponse(result=message).model_dump()
