"""Public interface definitions for every swappable collaborator.

The services in ``src/services/`` depend only on these abstract base
classes.  Concrete adapters live in ``src/providers/`` and are injected at
startup by ``src/main.py`` (or by the CLI), which keeps the services
testable with fakes.

    Interface        →  Concrete implementations (in src/providers/)
    ─────────────────────────────────────────────────────────────────
    ICacheProvider   →  JsonFileCacheProvider, MemoryCacheProvider
    IHtmlParser      →  BeautifulSoupParser
    IUpstreamClient  →  ShoeZoneClient
"""

from src.interfaces.cache_provider import ICacheProvider
from src.interfaces.html_parser import IHtmlDocument, IHtmlElement, IHtmlParser
from src.interfaces.upstream_client import IUpstreamClient

__all__ = [
    "ICacheProvider",
    "IHtmlDocument",
    "IHtmlElement",
    "IHtmlParser",
    "IUpstreamClient",
]
