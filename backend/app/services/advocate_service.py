"""Cached, filtered and paginated advocate listings."""

from __future__ import annotations

import asyncio
import functools
import hashlib
import json
from typing import Any, Callable, Optional

from sqlalchemy import ColumnElement

from app.cache.base import ListingCache
from app.core.logging import LoggerAdapter, get_logger
from app.core.metrics import (
    record_cache_invalidation,
    record_cache_lookup,
    record_store_failure,
    time_store_read,
)
from app.domain.advocates import AdvocateFilters, PageRequest, total_pages
from app.domain.exceptions import CacheUnavailable, StoreReadError
from app.repositories.advocate_filters import compose_advocate_predicate
from app.repositories.advocate_repository import AdvocateStore
from app.schemas.advocate import AdvocateListResponse, AdvocateResponse

logger = get_logger(__name__)

ADVOCATES_CACHE_TAG = "advocates"
DEFAULT_CACHE_TTL_SECONDS = 300
MAX_PAGE_SIZE = 100


def listing_cache_key(filters: AdvocateFilters, page: PageRequest) -> str:
    """Key for the exact (page, limit, filters) tuple; callers pass clamped pages."""
    parts = [
        page.page,
        page.limit,
        filters.city,
        filters.degree,
        filters.min_experience,
        filters.max_experience,
        filters.search,
    ]
    digest = hashlib.sha256(json.dumps(parts, separators=(",", ":")).encode()).hexdigest()
    return f"{ADVOCATES_CACHE_TAG}:list:{digest[:32]}"


class AdvocateListingService:
    """Resolves one (filters, page) request to a listing, serving repeats from cache.

    On a miss the page rows and the total match count are read concurrently
    from the store under the same predicate. A successful result is cached
    for ``cache_ttl`` seconds under the ``advocates`` tag; failures are never
    cached. Concurrent misses for the same key share one in-flight read.
    """

    def __init__(
        self,
        store: AdvocateStore,
        cache: ListingCache[AdvocateListResponse],
        *,
        cache_ttl: float = DEFAULT_CACHE_TTL_SECONDS,
        max_page_size: int = MAX_PAGE_SIZE,
        read_timeout: Optional[float] = 5.0,
        compose: Callable[[AdvocateFilters], ColumnElement[bool]] = compose_advocate_predicate,
    ) -> None:
        self.store = store
        self.cache = cache
        self.cache_ttl = cache_ttl
        self.max_page_size = max_page_size
        self.read_timeout = read_timeout
        self.compose = compose
        self._inflight: dict[str, asyncio.Future[AdvocateListResponse]] = {}

    # -------------------------------------------------------------------------
    # Queries

    async def list_advocates(
        self,
        filters: AdvocateFilters,
        page: PageRequest,
    ) -> AdvocateListResponse:
        page = page.clamped(self.max_page_size)
        key = listing_cache_key(filters, page)
        log = LoggerAdapter(logger, {"cache_key": key, **_log_ctx(filters, page)})

        cached = await self._cache_get(key, log)
        if cached is not None:
            record_cache_lookup("hit")
            log.debug("Listing cache hit")
            return cached
        record_cache_lookup("miss")

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._load_and_store(key, filters, page, log))
            self._inflight[key] = task
            task.add_done_callback(functools.partial(self._forget, key))
        else:
            log.debug("Joining in-flight listing read")
        # A cancelled caller stops waiting; the shared read keeps going for the others.
        return await asyncio.shield(task)

    # -------------------------------------------------------------------------
    # Cache control

    async def invalidate(self) -> int:
        """Force recomputation of every cached listing.

        Raises CacheUnavailable when the backend cannot be reached, since a
        silently skipped invalidation would keep serving stale pages.
        """
        removed = await self.cache.invalidate(ADVOCATES_CACHE_TAG)
        record_cache_invalidation(ADVOCATES_CACHE_TAG)
        logger.info("Invalidated %d cached advocate listings", removed)
        return removed

    # -------------------------------------------------------------------------
    # Internal helpers

    async def _load_and_store(
        self,
        key: str,
        filters: AdvocateFilters,
        page: PageRequest,
        log: LoggerAdapter,
    ) -> AdvocateListResponse:
        result = await self._load(filters, page, log)
        await self._cache_set(key, result, log)
        return result

    def _forget(self, key: str, task: asyncio.Future[AdvocateListResponse]) -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]
        # Every caller may have been cancelled; retrieve the outcome so that an
        # unobserved failure is not reported as never retrieved.
        if not task.cancelled():
            task.exception()

    async def _load(
        self,
        filters: AdvocateFilters,
        page: PageRequest,
        log: LoggerAdapter,
    ) -> AdvocateListResponse:
        predicate = self.compose(filters)
        reads = asyncio.gather(
            self._read("page", self.store.fetch, predicate, offset=page.offset, limit=page.limit),
            self._read("count", self.store.count, predicate),
        )
        try:
            rows, total = await asyncio.wait_for(reads, timeout=self.read_timeout)
        except asyncio.TimeoutError as exc:
            record_store_failure("timeout")
            log.error("Timed out fetching advocates after %ss", self.read_timeout)
            raise StoreReadError() from exc
        except Exception as exc:
            record_store_failure("error")
            log.exception("Error fetching advocates")
            raise StoreReadError() from exc

        return AdvocateListResponse(
            data=[AdvocateResponse.model_validate(row) for row in rows],
            total=total,
            page=page.page,
            limit=page.limit,
            total_pages=total_pages(total, page.limit),
        )

    async def _read(self, kind: str, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        with time_store_read(kind):
            return await asyncio.to_thread(fn, *args, **kwargs)

    async def _cache_get(self, key: str, log: LoggerAdapter) -> Optional[AdvocateListResponse]:
        try:
            return await self.cache.get(key)
        except CacheUnavailable as exc:
            record_cache_lookup("error")
            log.warning("Listing cache unavailable, reading from store: %s", exc.message)
            return None

    async def _cache_set(self, key: str, value: AdvocateListResponse, log: LoggerAdapter) -> None:
        try:
            await self.cache.set(key, value, ttl=self.cache_ttl, tags=(ADVOCATES_CACHE_TAG,))
        except CacheUnavailable as exc:
            log.warning("Listing cache unavailable, result not cached: %s", exc.message)


def _log_ctx(filters: AdvocateFilters, page: PageRequest) -> dict[str, Any]:
    return {
        "page": page.page,
        "limit": page.limit,
        "filters": {
            "city": filters.city,
            "degree": filters.degree,
            "min_experience": filters.min_experience,
            "max_experience": filters.max_experience,
            "search": filters.search,
        },
    }
