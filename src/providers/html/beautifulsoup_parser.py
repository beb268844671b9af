"""HTML parser provider using BeautifulSoup.

Wraps ``bs4`` objects in the :mod:`src.interfaces.html_parser` element and
document types so callers never touch a ``Tag`` directly.
"""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag

from src.interfaces.html_parser import IHtmlDocument, IHtmlElement, IHtmlParser


class _SoupElement(IHtmlElement):
    def __init__(self, tag: Tag) -> None:
        self._tag = tag

    @property
    def text(self) -> str:
        return self._tag.get_text()

    def get(self, attribute: str) -> str | None:
        value = self._tag.get(attribute)
        if value is None:
            return None
        # Multi-valued attributes (class, rel) come back as lists
        if isinstance(value, list):
            return " ".join(value)
        return value

    def select_one(self, selector: str) -> IHtmlElement | None:
        found = self._tag.select_one(selector)
        return _SoupElement(found) if found is not None else None

    def select(self, selector: str) -> list[IHtmlElement]:
        return [_SoupElement(tag) for tag in self._tag.select(selector)]


class _SoupDocument(IHtmlDocument):
    def __init__(self, soup: BeautifulSoup) -> None:
        self._root = _SoupElement(soup)

    def select_one(self, selector: str) -> IHtmlElement | None:
        return self._root.select_one(selector)

    def select(self, selector: str) -> list[IHtmlElement]:
        return self._root.select(selector)


class BeautifulSoupParser(IHtmlParser):
    """Parse markup with BeautifulSoup.

    Parameters
    ----------
    features:
        bs4 tree builder.  ``"html.parser"`` needs no extra packages;
        ``"lxml"`` is faster if installed.
    """

    def __init__(self, features: str = "html.parser") -> None:
        self._features = features

    def parse(self, markup: str) -> IHtmlDocument:
        return _SoupDocument(BeautifulSoup(markup, self._features))

    def get_provider_name(self) -> str:
        return "beautifulsoup"
