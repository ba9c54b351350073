"""In-process TTL cache with per-key request coalescing."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Hashable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LoadAbandoned(Exception):
    """The caller running a shared load was cancelled before it finished."""


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    fetched_at: float
    value: T


class TTLCache(Generic[T]):
    """Keyed cache whose entries expire `ttl_seconds` after they were stored.

    `get_or_load` coalesces concurrent loads of the same key: while one load
    is in flight, other callers await its result instead of starting their
    own. Entries are replaced whole, so readers only ever observe a complete
    previous value or a complete new one. A failed load stores nothing and
    the exception propagates to every waiter. If the loading caller is
    cancelled, its waiters retry the load instead of being cancelled too.
    """

    def __init__(
        self,
        ttl_seconds: float,
        name: str = "cache",
        clock: Callable[[], float] = time.monotonic,
        enabled: bool = True,
    ):
        self.ttl_seconds = ttl_seconds
        self.name = name
        self.enabled = enabled
        self._clock = clock
        self._entries: dict[Hashable, CacheEntry[T]] = {}
        self._inflight: dict[Hashable, asyncio.Future] = {}

    def get(self, key: Hashable) -> Optional[T]:
        """Return the fresh value for `key`, or None on miss or expiry."""
        if not self.enabled:
            return None
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.fetched_at >= self.ttl_seconds:
            self._entries.pop(key, None)
            return None
        return entry.value

    def set(self, key: Hashable, value: T) -> None:
        if self.enabled:
            self._entries[key] = CacheEntry(fetched_at=self._clock(), value=value)

    def invalidate(self, key: Hashable) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    async def get_or_load(self, key: Hashable, loader: Callable[[], Awaitable[T]]) -> T:
        cached = self.get(key)
        if cached is not None:
            return cached

        pending = self._inflight.get(key)
        if pending is not None:
            logger.debug("%s: joining in-flight load for %s", self.name, key)
            try:
                return await asyncio.shield(pending)
            except LoadAbandoned:
                logger.debug("%s: in-flight load for %s was cancelled, retrying", self.name, key)
                return await self.get_or_load(key, loader)

        future: asyncio.Future = asyncio.get_running_loop().create_future()
        self._inflight[key] = future
        try:
            value = await loader()
        except asyncio.CancelledError:
            # Only the loading caller was cancelled; waiters start a load of their own
            if not future.done():
                future.set_exception(LoadAbandoned(key))
                future.exception()
            raise
        except Exception as exc:
            if not future.done():
                future.set_exception(exc)
                # Mark retrieved so an unobserved failure does not warn at GC
                future.exception()
            raise
        else:
            self.set(key, value)
            if not future.done():
                future.set_result(value)
            return value
        finally:
            if self._inflight.get(key) is future:
                del self._inflight[key]
