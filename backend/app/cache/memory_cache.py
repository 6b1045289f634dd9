"""In-process listing cache."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Generic, Iterable, Optional, TypeVar

TValue = TypeVar("TValue")


@dataclass(slots=True)
class CacheEntry(Generic[TValue]):
    value: TValue
    expires_at: float
    tags: frozenset[str] = field(default_factory=frozenset)


class InMemoryCache(Generic[TValue]):
    """Dictionary-backed cache with TTL expiry, tags and a size bound.

    Expired entries are dropped lazily on read and when the cache is full.
    When still full, the oldest inserted entry is evicted.
    """

    def __init__(
        self,
        max_entries: int = 1024,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_entries = max_entries
        self._clock = clock
        self._entries: dict[str, CacheEntry[TValue]] = {}
        self._tags: dict[str, set[str]] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    async def get(self, key: str) -> Optional[TValue]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.expires_at <= self._clock():
                self._discard(key)
                return None
            return entry.value

    async def set(self, key: str, value: TValue, ttl: float, tags: Iterable[str] = ()) -> None:
        with self._lock:
            self._discard(key)
            if len(self._entries) >= self.max_entries:
                self._evict()
            entry = CacheEntry(value=value, expires_at=self._clock() + ttl, tags=frozenset(tags))
            self._entries[key] = entry
            for tag in entry.tags:
                self._tags.setdefault(tag, set()).add(key)

    async def invalidate(self, tag: str) -> int:
        with self._lock:
            keys = self._tags.pop(tag, set())
            for key in keys:
                self._discard(key)
            return len(keys)

    def _discard(self, key: str) -> None:
        entry = self._entries.pop(key, None)
        if entry is None:
            return
        for tag in entry.tags:
            keys = self._tags.get(tag)
            if keys is not None:
                keys.discard(key)
                if not keys:
                    del self._tags[tag]

    def _evict(self) -> None:
        now = self._clock()
        for key in [k for k, e in self._entries.items() if e.expires_at <= now]:
            self._discard(key)
        while len(self._entries) >= self.max_entries:
            self._discard(next(iter(self._entries)))
