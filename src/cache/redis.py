"""Redis client: scrape result get/set with TTL."""

from __future__ import annotations

import hashlib
import logging

import redis.asyncio as redis
from pydantic import ValidationError
from redis.backoff import ExponentialBackoff
from redis.retry import Retry

from src.api.schemas import ScrapeResult

logger = logging.getLogger(__name__)

KEY_PREFIX = "scrape:"


def cache_key(url: str) -> str:
    """Stable Redis key for *url*."""
    return KEY_PREFIX + hashlib.sha256(url.encode("utf-8")).hexdigest()


class RedisCache:
    """Thin async wrapper around Redis for caching scrape results by URL.

    Redis expires keys both lazily on read and in its background cycle, so an
    entry past its TTL is never returned.
    """

    def __init__(self, client: redis.Redis, default_ttl: int = 3600) -> None:
        self._client = client
        self._default_ttl = default_ttl

    async def get(self, url: str) -> ScrapeResult | None:
        """Return cached result, or ``None`` on miss / error."""
        try:
            raw = await self._client.get(cache_key(url))
            if raw is None:
                logger.debug("cache miss", extra={"url": url})
                return None
            logger.debug("cache hit", extra={"url": url})
            return ScrapeResult.model_validate_json(raw)
        except redis.RedisError:
            logger.warning("cache get failed", extra={"url": url}, exc_info=True)
            return None
        except ValidationError:
            # Corrupt or outdated payload; the next successful scrape overwrites it
            logger.warning("cache entry unreadable, treating as miss", extra={"url": url}, exc_info=True)
            return None

    async def set(self, url: str, result: ScrapeResult, ttl: int | None = None) -> bool:
        """Store *result* with a TTL. Returns ``False`` on error."""
        effective_ttl = ttl if ttl is not None else self._default_ttl
        try:
            await self._client.set(
                cache_key(url),
                result.model_dump_json(by_alias=True),
                ex=effective_ttl,
            )
            logger.debug("cache set", extra={"url": url, "ttl": effective_ttl})
            return True
        except redis.RedisError:
            logger.warning("cache set failed", extra={"url": url}, exc_info=True)
            return False

    async def clear(self) -> int:
        """Delete every cached scrape result. Returns the number of keys removed."""
        deleted = 0
        batch: list[str] = []
        try:
            async for key in self._client.scan_iter(match=f"{KEY_PREFIX}*", count=500):
                batch.append(key)
                if len(batch) >= 500:
                    deleted += await self._client.delete(*batch)
                    batch.clear()
            if batch:
                deleted += await self._client.delete(*batch)
        except redis.RedisError:
            logger.warning("cache clear failed", extra={"deleted": deleted}, exc_info=True)
            return deleted
        logger.info("cache cleared", extra={"deleted": deleted})
        return deleted


async def create_redis_client(redis_url: str) -> redis.Redis:
    # Strip credentials for logging (everything before @ if present)
    safe_url = redis_url.split("@")[-1] if "@" in redis_url else redis_url
    logger.info("connecting to redis", extra={"redis_url": safe_url})
    retry = Retry(ExponentialBackoff(), retries=3)
    return redis.from_url(
        redis_url,
        decode_responses=True,
        socket_connect_timeout=5,
        socket_timeout=5,
        health_check_interval=30,
        retry=retry,
        retry_on_error=[redis.ConnectionError, redis.TimeoutError],
    )
