"""Per-key request collapsing for cache misses.

When two requests for the same store query or product page arrive while
the cache is cold, both would otherwise go to the retail site and both
would write the cache.  :class:`SingleFlight` makes the second caller wait
for the first caller's result instead.

Only callers that share a key are coordinated; different keys proceed
independently.  Exceptions are shared too: if the leader fails, every
waiter receives the same exception, and the next call starts a fresh
attempt (nothing is retried automatically).  Leader cancellation is not
shared: waiters keep waiting, and one of them starts a fresh call.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Generic, TypeVar

import structlog

from src.utils.logging import get_logger

_T = TypeVar("_T")

_logger: structlog.BoundLogger = get_logger(__name__)


class SingleFlight(Generic[_T]):
    """Run at most one in-flight call per key, sharing its outcome with duplicates."""

    def __init__(self) -> None:
        self._inflight: dict[str, asyncio.Future[_T]] = {}

    def in_flight(self, key: str) -> bool:
        """Return ``True`` while a call for *key* is running."""
        return key in self._inflight

    async def run(self, key: str, fn: Callable[[], Awaitable[_T]]) -> _T:
        """Await ``fn()`` for *key*, or join the call already running for it.

        Parameters
        ----------
        key:
            The cache key the call populates.
        fn:
            Zero-argument coroutine factory; only invoked by the leader.
        """
        existing = self._inflight.get(key)
        if existing is not None:
            _logger.debug("single_flight_join", key=key)
            # wait() neither cancels the shared future nor raises when it is cancelled
            await asyncio.wait({existing})
            if existing.cancelled():
                _logger.debug("single_flight_leader_cancelled", key=key)
                return await self.run(key, fn)
            return existing.result()

        future: asyncio.Future[_T] = asyncio.get_running_loop().create_future()
        self._inflight[key] = future
        try:
            result = await fn()
        except asyncio.CancelledError:
            future.cancel()
            raise
        except Exception as exc:
            future.set_exception(exc)
            # Mark retrieved so an un-awaited failure does not log a warning
            future.exception()
            raise
        else:
            future.set_result(result)
            return result
        finally:
            del self._inflight[key]
