"""Redis-backed cache for trending results.

Built once in the application lifespan and handed to the trend ranker through
dependency injection. A cache failure is a miss, never a request failure.
"""
import logging

import redis.asyncio as aioredis
from pydantic import ValidationError
from redis.exceptions import RedisError

from pulse.schemas.feed import TrendingResponse

logger = logging.getLogger(__name__)


class TrendingCache:
    def __init__(self, redis: aioredis.Redis, ttl_seconds: int, prefix: str = "trending"):
        self.redis = redis
        self.ttl_seconds = ttl_seconds
        self.prefix = prefix

    @classmethod
    def from_url(cls, url: str, ttl_seconds: int) -> "TrendingCache":
        return cls(aioredis.from_url(url, decode_responses=True), ttl_seconds)

    def key(self, timeframe: str, limit: int) -> str:
        return f"{self.prefix}:{timeframe}:{limit}"

    async def get(self, timeframe: str, limit: int) -> TrendingResponse | None:
        key = self.key(timeframe, limit)
        try:
            raw = await self.redis.get(key)
        except RedisError as exc:
            logger.warning("Trending cache read failed (%s) - computing fresh", exc)
            return None
        if raw is None:
            return None
        try:
            return TrendingResponse.model_validate_json(raw)
        except ValidationError:
            logger.warning("Discarding unreadable trending cache entry %s", key)
            return None

    async def set(self, timeframe: str, limit: int, response: TrendingResponse) -> None:
        try:
            await self.redis.set(
                self.key(timeframe, limit),
                response.model_dump_json(by_alias=True),
                ex=self.ttl_seconds,
            )
        except RedisError as exc:
            logger.warning("Trending cache write failed: %s", exc)

    async def close(self) -> None:
        await self.redis.aclose()
