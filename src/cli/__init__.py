"""Command-line tools for the Shoe Zone proxy.

- ``python -m src.cli`` (or ``python -m src.cli.query``): locate stores,
  check stock, scrape products, and inspect the cache files without
  starting the web server.
"""
