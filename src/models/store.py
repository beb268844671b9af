"""Store location and stock-check records.

Both models serialize with camelCase keys (``storeName``, ``inStock``) to
match the JSON the API has always returned; Python code uses the
snake_case attribute names.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Store(BaseModel):
    """A physical Shoe Zone store, as resolved by the store locator.

    Cached indefinitely under its normalized query key, so the stored dict
    form (``model_dump(by_alias=True)``) must round-trip through
    ``model_validate``.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    store_name: str          # Title-cased display name ("Shoe Zone Gloucester")
    store_id: int            # Upstream store key
    store_address: str       # "<property>, <street>, <postcode>"
    store_phone: str         # Telephone with whitespace removed


class StockCheckResult(BaseModel):
    """Whether one store can supply a quantity of one style/size.

    Created fresh on every call and never cached.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    in_stock: bool
    store_name: str
    store_id: int
    store_address: str
