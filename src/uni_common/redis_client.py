"""Shared redis.asyncio client for the rate limiter.

Balances, pools and bets never touch Redis; PostgreSQL is the only ledger.
Losing Redis therefore only affects throttling.
"""

import redis.asyncio as aioredis

from config.settings import settings

_redis_client: aioredis.Redis | None = None


async def get_redis() -> aioredis.Redis:
    """Return the process-wide client, creating it on first use."""
    global _redis_client  # noqa: PLW0603
    if _redis_client is None:
        _redis_client = aioredis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            health_check_interval=30,
        )
    return _redis_client


async def count_in_window(key: str, window_seconds: int) -> int:
    """Increment a fixed-window counter and return the hits so far.

    The TTL is armed only by the first hit, so the window never slides.
    """
    redis = await get_redis()
    count = int(await redis.incr(key))
    if count == 1:
        await redis.expire(key, window_seconds)
    return count


async def close_redis() -> None:
    global _redis_client  # noqa: PLW0603
    if _redis_client is not None:
        await _redis_client.aclose()
        _redis_client = None
