"""Durable cache provider backed by a single JSON file.

Each data domain gets its own file (``store-locator-api.json``,
``product-api.json``) under the cache directory.  The whole file is read
once by :meth:`load` at startup and rewritten in full by every
:meth:`persist` call.  That is fine for the handful of writes per minute
this proxy sees; it would not be at high write rates.

Writes go to a temporary sibling file which then replaces the real one,
so a crash mid-write never leaves a truncated cache behind.
"""

from __future__ import annotations

import asyncio
import json
import os
from pathlib import Path
from typing import Any

import structlog

from src.interfaces.cache_provider import ICacheProvider
from src.models.cache import CacheEntry
from src.utils.errors import CacheIOError

logger = structlog.get_logger(logger_name=__name__)


class JsonFileCacheProvider(ICacheProvider):
    """Key-value cache persisted as one JSON object per file.

    Parameters
    ----------
    path:
        Location of the JSON file.  Parent directories are created on the
        first persist.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._data: dict[str, Any] = {}
        self._write_lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _read_file(self) -> dict[str, Any]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise CacheIOError(
                message=f"Cannot read cache file {self._path}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise CacheIOError(
                message=f"Cache file {self._path} is not valid JSON",
                provider_name=self.get_provider_name(),
            ) from exc
        if not isinstance(data, dict):
            raise CacheIOError(
                message=f"Cache file {self._path} does not hold a JSON object",
                provider_name=self.get_provider_name(),
            )
        return data

    def _write_file(self, serialized: str) -> None:
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(serialized, encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as exc:
            raise CacheIOError(
                message=f"Cannot write cache file {self._path}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

    # ------------------------------------------------------------------
    # ICacheProvider implementation
    # ------------------------------------------------------------------

    async def load(self) -> None:
        """Replace the in-memory contents with whatever the file holds."""
        self._data = await asyncio.to_thread(self._read_file)
        logger.info("cache_loaded", path=str(self._path), entries=len(self._data))

    async def get(self, key: str) -> Any | None:
        value = self._data.get(key)
        if value is not None:
            logger.debug("cache_hit", path=str(self._path), key=key)
        else:
            logger.debug("cache_miss", path=str(self._path), key=key)
        return value

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        logger.debug("cache_set", path=str(self._path), key=key)

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)
        logger.debug("cache_delete", path=str(self._path), key=key)

    async def exists(self, key: str) -> bool:
        return key in self._data

    async def clear(self) -> None:
        self._data = {}
        logger.info("cache_cleared", path=str(self._path))

    async def persist(self) -> None:
        """Write the full contents to disk.

        The snapshot is serialised on the event loop so concurrent mutations
        cannot change it mid-write; only the file I/O runs in a thread.
        """
        try:
            serialized = json.dumps(self._data, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise CacheIOError(
                message=f"Cache contents are not JSON-serialisable: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        async with self._write_lock:
            await asyncio.to_thread(self._write_file, serialized)
        logger.debug("cache_persisted", path=str(self._path), entries=len(self._data))

    async def entries(self) -> list[CacheEntry]:
        return [CacheEntry.from_value(key, value) for key, value in self._data.items()]

    def get_provider_name(self) -> str:
        return "json_file_cache"
