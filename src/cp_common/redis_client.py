"""Redis access for the pricing assumptions cache.

Wallet balances and freezes never touch Redis; PostgreSQL is the only
source of truth for money.
"""

import json
from typing import Any

import redis.asyncio as aioredis

from config.settings import settings

_redis_pool: aioredis.Redis | None = None


async def get_redis() -> aioredis.Redis:
    """Get or create the Redis connection pool."""
    global _redis_pool  # noqa: PLW0603
    if _redis_pool is None:
        _redis_pool = aioredis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
        )
    return _redis_pool


async def close_redis() -> None:
    global _redis_pool  # noqa: PLW0603
    if _redis_pool is not None:
        await _redis_pool.aclose()
        _redis_pool = None


async def cache_get_json(key: str) -> dict[str, Any] | None:
    """Return the decoded JSON object stored at key, or None on a miss."""
    client = await get_redis()
    raw = await client.get(key)
    if raw is None:
        return None
    value = json.loads(raw)
    return value if isinstance(value, dict) else None


async def cache_set_json(key: str, value: dict[str, Any], ttl_seconds: int) -> None:
    client = await get_redis()
    await client.set(key, json.dumps(value), ex=ttl_seconds)
