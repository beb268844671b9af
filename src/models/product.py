"""Product records scraped from a product page.

A :class:`Product` is built from one HTML document and cached (as a plain
dict) under the page TTL.  Field names serialize to camelCase
(``sizeRange``) for API clients.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class Price(_Record):
    """Current selling price.  Price history is not shown reliably on the page."""

    current: Decimal

    @field_serializer("current", when_used="json")
    def _serialize_current(self, value: Decimal) -> float:
        # JSON clients expect a number, not pydantic's default decimal string
        return float(value)


class SizeStock(_Record):
    """Units available for a size.

    Only warehouse stock is published; per-store quantities are not
    obtainable from the site.
    """

    warehouse: int


class SizeEntry(_Record):
    """One selectable size on the product page, in document order."""

    size: str               # Upper-cased label ("7", "UK 10", "ONE SIZE")
    stock: SizeStock
    code: str               # 3-character size code appended to the style code


class Offer(_Record):
    """A promotional badge shown on the product page."""

    name: str               # Raw title ("Buy One Get One Free")
    image: str              # Badge image URL
    abbr: str               # Short code ("BOGOF")


class Product(_Record):
    """Everything scraped from a single product page."""

    id: int
    name: str
    price: Price
    currency: str = Field(min_length=3, max_length=3)
    thumbnail: str
    categories: list[str] = Field(default_factory=list)
    size_range: list[SizeEntry] = Field(default_factory=list)
    offers: list[Offer] = Field(default_factory=list)
