"""Abstract base classes for HTML parsing.

The product scraper only needs "give me the elements matching this CSS
selector" and "give me this attribute/text".  Hiding the parsing engine
behind these interfaces keeps the extraction logic unchanged if the
engine is swapped (BeautifulSoup today, selectolax or lxml tomorrow).
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class IHtmlElement(ABC):
    """A single element in a parsed document."""

    @property
    @abstractmethod
    def text(self) -> str:
        """Concatenated text content of the element and its descendants (unstripped)."""

    @abstractmethod
    def get(self, attribute: str) -> str | None:
        """Return the value of *attribute*, or ``None`` if it is absent."""

    @abstractmethod
    def select_one(self, selector: str) -> IHtmlElement | None:
        """Return the first descendant matching the CSS *selector*, or ``None``."""

    @abstractmethod
    def select(self, selector: str) -> list[IHtmlElement]:
        """Return all descendants matching the CSS *selector*, in document order."""


class IHtmlDocument(ABC):
    """A parsed HTML document supporting CSS selector queries."""

    @abstractmethod
    def select_one(self, selector: str) -> IHtmlElement | None:
        """Return the first element matching *selector*, or ``None``."""

    @abstractmethod
    def select(self, selector: str) -> list[IHtmlElement]:
        """Return all elements matching *selector*, in document order."""


class IHtmlParser(ABC):
    """Contract for turning raw markup into a navigable document."""

    @abstractmethod
    def parse(self, markup: str) -> IHtmlDocument:
        """Parse *markup* into a document."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for the parsing engine."""
