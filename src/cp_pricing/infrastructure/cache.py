"""Assumptions snapshot cache (Redis, cache-aside).

Key: "assumptions:current", short TTL. The DB stays authoritative: a Redis
outage degrades to a direct DB read and is logged as a warning.
"""

import logging

from redis.exceptions import RedisError

from src.cp_common.redis_client import cache_get_json, cache_set_json
from src.cp_pricing.domain.models import Assumptions

logger = logging.getLogger(__name__)

CACHE_KEY = "assumptions:current"


class AssumptionsCache:
    def __init__(self, ttl_seconds: int) -> None:
        self._ttl = ttl_seconds

    async def get(self) -> Assumptions | None:
        try:
            payload = await cache_get_json(CACHE_KEY)
        except RedisError as exc:
            logger.warning("Assumptions cache read failed, falling back to DB: %s", exc)
            return None
        if payload is None:
            return None
        try:
            return Assumptions.from_cache(payload)
        except (KeyError, ArithmeticError, ValueError) as exc:
            logger.warning("Discarding malformed cached assumptions: %s", exc)
            return None

    async def put(self, assumptions: Assumptions) -> None:
        try:
            await cache_set_json(CACHE_KEY, assumptions.to_cache(), self._ttl)
        except RedisError as exc:
            logger.warning("Assumptions cache write failed: %s", exc)
