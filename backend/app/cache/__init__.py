"""Listing cache backends."""

from __future__ import annotations

from app.core.config import Settings
from app.core.logging import get_logger
from app.schemas.advocate import AdvocateListResponse

from .base import ListingCache, NullCache
from .memory_cache import CacheEntry, InMemoryCache
from .redis_cache import RedisCache

logger = get_logger(__name__)


def build_cache(config: Settings) -> ListingCache[AdvocateListResponse]:
    """Construct the cache backend selected by ``config.cache_backend``."""
    if config.cache_backend == "none":
        logger.info("Listing cache disabled")
        return NullCache()
    if config.cache_backend == "redis":
        if not config.redis_url:
            raise ValueError("REDIS_URL must be set when CACHE_BACKEND=redis")
        logger.info("Using Redis listing cache")
        return RedisCache.from_url(config.redis_url, AdvocateListResponse)
    logger.info("Using in-memory listing cache")
    return InMemoryCache()


__all__ = [
    "CacheEntry",
    "InMemoryCache",
    "ListingCache",
    "NullCache",
    "RedisCache",
    "build_cache",
]
