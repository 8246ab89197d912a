"""
Rate limit middleware: Redis sliding window keyed by X-User-ID.
Default RATE_LIMIT_PER_MIN per owner. Without REDIS_URL the check is skipped.
"""
import time
import uuid
from typing import Callable, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from bible_study.config import get_settings
from bible_study.deps import HEADER_USER_ID
from bible_study.logging_config import get_logger

logger = get_logger(__name__)

REDIS_KEY_PREFIX = "bible_study:rl:"
WINDOW_SECONDS = 60


def _rate_limit_key(request: Request) -> Optional[str]:
    owner = request.headers.get(HEADER_USER_ID, "").strip()
    if owner:
        return f"user:{owner[:64]}"
    return None


async def _check_sliding_window(redis_url: str, key: str, limit: int) -> bool:
    """
    Sliding window: ZADD now, ZREMRANGEBYSCORE -inf (now-60), ZCARD.
    True when the request is allowed. Redis errors allow the request.
    """
    from redis.asyncio import Redis

    now = time.time()
    rkey = REDIS_KEY_PREFIX + key
    try:
        client = Redis.from_url(redis_url, decode_responses=True)
        try:
            pipe = client.pipeline()
            pipe.zadd(rkey, {str(uuid.uuid4()): now})
            pipe.zremrangebyscore(rkey, "-inf", now - WINDOW_SECONDS)
            pipe.zcard(rkey)
            pipe.expire(rkey, WINDOW_SECONDS + 10)
            results = await pipe.execute()
            count = results[2] if len(results) > 2 else 0
            return count <= limit
        finally:
            await client.aclose()
    except Exception as e:
        logger.warning("rate_limit.redis_error", key=key, error=str(e))
        return True


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Per-owner rate limit (Redis sliding window)."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        settings = get_settings()
        if not settings.redis_url:
            return await call_next(request)
        key = _rate_limit_key(request)
        if not key:
            return await call_next(request)
        limit = settings.rate_limit_per_min
        allowed = await _check_sliding_window(settings.redis_url, key, limit)
        if not allowed:
            logger.info("rate_limit.exceeded", key=key, limit=limit)
            return Response(
                content='{"detail":"Rate limit exceeded.","code":"rate_limited"}',
                status_code=429,
                media_type="application/json",
            )
        return await call_next(request)
