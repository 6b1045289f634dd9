"""Listing cache contract."""

from __future__ import annotations

from typing import Iterable, Optional, Protocol, TypeVar

from pydantic import BaseModel

TValue = TypeVar("TValue", bound=BaseModel)


class ListingCache(Protocol[TValue]):
    """Key/value cache with per-entry TTL and tag based bulk invalidation.

    ``get`` returns ``None`` for absent, expired and invalidated keys.
    Backends raise :class:`app.domain.exceptions.CacheUnavailable` when their
    storage cannot be reached; callers decide whether that is fatal.
    """

    async def get(self, key: str) -> Optional[TValue]: ...

    async def set(
        self,
        key: str,
        value: TValue,
        ttl: float,
        tags: Iterable[str] = (),
    ) -> None: ...

    async def invalidate(self, tag: str) -> int:
        """Drop every entry carrying ``tag``; returns how many were dropped."""
        ...


class NullCache:
    """Cache that never stores anything; every lookup is a miss."""

    async def get(self, key: str) -> None:
        return None

    async def set(self, key: str, value: BaseModel, ttl: float, tags: Iterable[str] = ()) -> None:
        return None

    async def invalidate(self, tag: str) -> int:
        return 0
