from __future__ import annotations

import json
import logging
import time
from collections import OrderedDict
from collections.abc import Callable
from enum import StrEnum
from typing import Any

from redis.asyncio import Redis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)

MISSING: Any = object()


class CacheNamespace(StrEnum):
    search = "search"  # scraped search results
    policy = "policy"  # policy text per detail URL
    api = "api"  # classified API responses


DEFAULT_TTLS = {
    CacheNamespace.search: 60 * 60,
    CacheNamespace.policy: 24 * 60 * 60,
    CacheNamespace.api: 5 * 60,
}

DEFAULT_CAPACITIES = {
    CacheNamespace.search: 200,
    CacheNamespace.policy: 1000,
    CacheNamespace.api: 200,
}


class MemoryCache:
    """Bounded in-process cache with per-entry TTL and LRU eviction.

    Reads move the entry to the young end; inserting past capacity evicts
    the least recently used entry. Expired entries are dropped on read.
    """

    def __init__(self, max_entries: int = 200, clock: Callable[[], float] = time.monotonic):
        self._entries: OrderedDict[str, tuple[Any, float]] = OrderedDict()
        self._max_entries = max_entries
        self._clock = clock

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str, default: Any = None) -> Any:
        entry = self._entries.get(key)
        if entry is None:
            return default
        value, expires_at = entry
        if self._clock() > expires_at:
            del self._entries[key]
            return default
        self._entries.move_to_end(key)
        return value

    def set(self, key: str, value: Any, ttl: float) -> None:
        if key in self._entries:
            del self._entries[key]
        while self._entries and len(self._entries) >= self._max_entries:
            self._entries.popitem(last=False)
        self._entries[key] = (value, self._clock() + ttl)


class TwoTierCache:
    """Redis first, in-memory always.

    Values must be JSON-serializable. Redis errors are logged and the
    in-memory tier answers instead; they never reach the caller.
    """

    def __init__(
        self,
        redis: Redis | None = None,
        capacities: dict[CacheNamespace, int] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._redis = redis
        capacities = {**DEFAULT_CAPACITIES, **(capacities or {})}
        self._memory = {ns: MemoryCache(capacities[ns], clock=clock) for ns in CacheNamespace}

    @property
    def durable(self) -> bool:
        return self._redis is not None

    def memory(self, namespace: CacheNamespace) -> MemoryCache:
        return self._memory[CacheNamespace(namespace)]

    async def get(self, namespace: CacheNamespace, key: str, default: Any = None) -> Any:
        if self._redis is not None:
            try:
                raw = await self._redis.get(f"{namespace}:{key}")
                if raw is not None:
                    return json.loads(raw)
            except (RedisError, OSError, ValueError) as exc:
                logger.warning("Redis get failed for %s:%s: %s", namespace, key, exc)
        return self.memory(namespace).get(key, default)

    async def set(
        self,
        namespace: CacheNamespace,
        key: str,
        value: Any,
        ttl: int | None = None,
    ) -> None:
        ttl = ttl if ttl is not None else DEFAULT_TTLS[CacheNamespace(namespace)]
        if self._redis is not None:
            try:
                await self._redis.set(f"{namespace}:{key}", json.dumps(value), ex=ttl)
            except (RedisError, OSError, TypeError, ValueError) as exc:
                logger.warning("Redis set failed for %s:%s: %s", namespace, key, exc)
        self.memory(namespace).set(key, value, ttl)

    async def close(self) -> None:
        if self._redis is None:
            return
        try:
            await self._redis.aclose()
        except (RedisError, OSError):
            logger.debug("Error closing redis client", exc_info=True)
        self._redis = None


def create_redis(url: str) -> Redis | None:
    """Redis client for ``url``, or None when no durable tier is configured."""
    if not url:
        return None
    try:
        return Redis.from_url(url, socket_timeout=2.0, socket_connect_timeout=2.0)
    except (RedisError, ValueError) as exc:
        logger.warning("Could not configure redis from REDIS_URL: %s", exc)
        return None
