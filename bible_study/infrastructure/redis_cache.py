"""
Redis string cache for content-provider payloads (book catalogs per translation).
Keys live under bible_study:cache: so the server can share a Redis with other apps.
Without REDIS_URL every call is a no-op; Redis errors are logged and read as a miss.
"""
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

from bible_study.config import get_settings
from bible_study.logging_config import get_logger

logger = get_logger(__name__)

CACHE_PREFIX = "bible_study:cache:"
DEFAULT_TTL_SECONDS = 300


def cache_key(key: str) -> str:
    return CACHE_PREFIX + key


@asynccontextmanager
async def _redis() -> AsyncIterator[Optional[Redis]]:
    """Short-lived client per call, or None when Redis is not configured."""
    settings = get_settings()
    if not settings.redis_url:
        yield None
        return
    client = Redis.from_url(settings.redis_url, decode_responses=True)
    try:
        yield client
    finally:
        await client.aclose()


async def cache_get(key: str) -> Optional[str]:
    """Cached value or None (not configured, absent, Redis down)."""
    try:
        async with _redis() as client:
            if client is None:
                return None
            return await client.get(cache_key(key))
    except (RedisError, OSError) as e:
        logger.warning("cache.get_failed", key=key, error=str(e))
        return None


async def cache_set(key: str, value: str, ttl_seconds: int = DEFAULT_TTL_SECONDS) -> bool:
    try:
        async with _redis() as client:
            if client is None:
                return False
            await client.setex(cache_key(key), ttl_seconds, value)
            return True
    except (RedisError, OSError) as e:
        logger.warning("cache.set_failed", key=key, error=str(e))
        return False


async def cache_delete(key: str) -> bool:
    """Drop a key (e.g. a corrupt catalog entry). False when nothing could be done."""
    try:
        async with _redis() as client:
            if client is None:
                return False
            await client.delete(cache_key(key))
            return True
    except (RedisError, OSError) as e:
        logger.warning("cache.delete_failed", key=key, error=str(e))
        return False
