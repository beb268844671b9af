"""HTML parsing providers.

BeautifulSoupParser implements IHtmlParser with bs4's built-in
``html.parser`` backend and soupsieve CSS selectors.
"""

from src.providers.html.beautifulsoup_parser import BeautifulSoupParser

__all__ = ["BeautifulSoupParser"]
