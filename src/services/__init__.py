"""Core services: the store locator, stock checker and product scraper.

Each service receives its upstream client, cache and parser through its
constructor; nothing reaches for module-level singletons.
"""

from src.services.product_scraper import ProductScraper
from src.services.stock_checker import StockChecker
from src.services.store_locator import StoreLocator

__all__ = ["ProductScraper", "StockChecker", "StoreLocator"]
