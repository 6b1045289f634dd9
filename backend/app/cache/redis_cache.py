"""Redis-backed listing cache."""

from __future__ import annotations

import uuid
from typing import Generic, Iterable, Optional, Type, TypeVar

import pydantic
import redis.asyncio as redis_async
from redis.exceptions import RedisError, ResponseError

from app.core.logging import get_logger
from app.domain.exceptions import CacheUnavailable

logger = get_logger(__name__)

TModel = TypeVar("TModel", bound=pydantic.BaseModel)


class RedisCache(Generic[TModel]):
    """Stores pydantic models as JSON strings with a Redis-side TTL.

    Tags are Redis sets holding the keys tagged with them. A tag set expires
    together with the newest entry added to it, so it never outlives the
    entries it indexes by more than one TTL.
    """

    def __init__(
        self,
        client: redis_async.Redis,
        model: Type[TModel],
        namespace: str = "advocates:cache",
    ) -> None:
        self.client = client
        self.model = model
        self.namespace = namespace

    @classmethod
    def from_url(cls, url: str, model: Type[TModel], **kwargs) -> "RedisCache[TModel]":
        return cls(redis_async.from_url(url), model, **kwargs)

    def _key(self, key: str) -> str:
        return f"{self.namespace}:entry:{key}"

    def _tag_key(self, tag: str) -> str:
        return f"{self.namespace}:tag:{tag}"

    async def get(self, key: str) -> Optional[TModel]:
        try:
            raw = await self.client.get(self._key(key))
        except RedisError as exc:
            raise CacheUnavailable(f"Redis GET failed: {exc}") from exc
        if raw is None:
            return None
        try:
            return self.model.model_validate_json(raw)
        except pydantic.ValidationError:
            logger.warning("Discarding undecodable cache entry %s", key, exc_info=True)
            return None

    async def set(self, key: str, value: TModel, ttl: float, tags: Iterable[str] = ()) -> None:
        redis_key = self._key(key)
        ttl_ms = max(int(ttl * 1000), 1)
        try:
            async with self.client.pipeline(transaction=True) as pipe:
                pipe.set(redis_key, value.model_dump_json(by_alias=True), px=ttl_ms)
                for tag in tags:
                    tag_key = self._tag_key(tag)
                    pipe.sadd(tag_key, redis_key)
                    pipe.pexpire(tag_key, ttl_ms)
                await pipe.execute()
        except RedisError as exc:
            raise CacheUnavailable(f"Redis SET failed: {exc}") from exc

    async def invalidate(self, tag: str) -> int:
        """Delete every entry tagged with ``tag``.

        The tag set is first renamed to a private key in one atomic step, so
        an entry tagged while the purge runs lands in a fresh tag set and is
        left for the next invalidation rather than orphaned.
        """
        tag_key = self._tag_key(tag)
        purge_key = f"{tag_key}:purge:{uuid.uuid4().hex}"
        try:
            try:
                await self.client.rename(tag_key, purge_key)
            except ResponseError as exc:
                if "no such key" not in str(exc).lower():
                    raise
                return 0
            members = await self.client.smembers(purge_key)
            async with self.client.pipeline(transaction=True) as pipe:
                if members:
                    pipe.delete(*members)
                pipe.delete(purge_key)
                await pipe.execute()
        except RedisError as exc:
            raise CacheUnavailable(f"Redis invalidation failed: {exc}") from exc
        return len(members)

    async def close(self) -> None:
        await self.client.aclose()
