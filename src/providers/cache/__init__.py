"""Cache providers.

Two implementations of ICacheProvider:
    1. JsonFileCacheProvider: one JSON file per data domain, loaded at
       startup and rewritten after every mutation.  The default.
    2. MemoryCacheProvider: unbounded dict that forgets everything on restart.
       Used with ``CACHE_BACKEND=memory`` and in tests.
"""

from src.providers.cache.json_file_cache import JsonFileCacheProvider
from src.providers.cache.memory_cache import MemoryCacheProvider

__all__ = ["JsonFileCacheProvider", "MemoryCacheProvider"]
