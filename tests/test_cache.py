"""Tests for MemoryCache and TwoTierCache."""

import json
from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from app.cache import MISSING, CacheNamespace, MemoryCache, TwoTierCache, create_redis


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


# --- MemoryCache ---


def test_memory_round_trip():
    cache = MemoryCache()
    cache.set("k", {"a": 1}, ttl=60)
    assert cache.get("k") == {"a": 1}


def test_memory_expires_after_ttl():
    clock = FakeClock()
    cache = MemoryCache(clock=clock)
    cache.set("k", "v", ttl=10)
    clock.now += 10
    assert cache.get("k") == "v"
    clock.now += 0.001
    assert cache.get("k") is None
    assert len(cache) == 0


def test_memory_evicts_least_recently_used():
    cache = MemoryCache(max_entries=2)
    cache.set("a", 1, ttl=60)
    cache.set("b", 2, ttl=60)
    assert cache.get("a") == 1  # a is now the most recent
    cache.set("c", 3, ttl=60)
    assert cache.get("b") is None
    assert cache.get("a") == 1
    assert cache.get("c") == 3


def test_memory_overwrite_does_not_evict():
    cache = MemoryCache(max_entries=2)
    cache.set("a", 1, ttl=60)
    cache.set("b", 2, ttl=60)
    cache.set("a", 10, ttl=60)
    assert len(cache) == 2
    assert cache.get("a") == 10
    assert cache.get("b") == 2


def test_memory_default_distinguishes_cached_none():
    cache = MemoryCache()
    cache.set("k", None, ttl=60)
    assert cache.get("k", MISSING) is None
    assert cache.get("other", MISSING) is MISSING


# --- TwoTierCache without redis ---


async def test_two_tier_memory_only_round_trip():
    cache = TwoTierCache()
    assert not cache.durable
    await cache.set(CacheNamespace.search, "k", [1, 2], ttl=60)
    assert await cache.get(CacheNamespace.search, "k") == [1, 2]


async def test_two_tier_namespaces_are_isolated():
    cache = TwoTierCache()
    await cache.set(CacheNamespace.search, "k", "search", ttl=60)
    await cache.set(CacheNamespace.policy, "k", "policy", ttl=60)
    assert await cache.get(CacheNamespace.search, "k") == "search"
    assert await cache.get(CacheNamespace.policy, "k") == "policy"
    assert await cache.get(CacheNamespace.api, "k") is None


async def test_two_tier_ttl_expiry():
    clock = FakeClock()
    cache = TwoTierCache(clock=clock)
    await cache.set(CacheNamespace.api, "k", "v", ttl=300)
    assert await cache.get(CacheNamespace.api, "k") == "v"
    clock.now += 301
    assert await cache.get(CacheNamespace.api, "k") is None


async def test_two_tier_capacity_per_namespace():
    cache = TwoTierCache(capacities={CacheNamespace.search: 1})
    await cache.set(CacheNamespace.search, "a", 1, ttl=60)
    await cache.set(CacheNamespace.search, "b", 2, ttl=60)
    assert await cache.get(CacheNamespace.search, "a") is None
    assert await cache.get(CacheNamespace.search, "b") == 2


# --- TwoTierCache with redis ---


async def test_redis_hit_is_preferred():
    redis = AsyncMock()
    redis.get.return_value = json.dumps({"from": "redis"}).encode()
    cache = TwoTierCache(redis)

    assert await cache.get(CacheNamespace.policy, "https://h/x") == {"from": "redis"}
    redis.get.assert_awaited_once_with("policy:https://h/x")


async def test_redis_set_uses_namespaced_key_and_expiry():
    redis = AsyncMock()
    cache = TwoTierCache(redis)
    await cache.set(CacheNamespace.search, "booking:1,2:20:50", [{"id": "a"}], ttl=3600)
    redis.set.assert_awaited_once_with(
        "search:booking:1,2:20:50", json.dumps([{"id": "a"}]), ex=3600
    )


async def test_redis_default_ttl_by_namespace():
    redis = AsyncMock()
    cache = TwoTierCache(redis)
    await cache.set(CacheNamespace.policy, "u", None)
    assert redis.set.await_args.kwargs["ex"] == 24 * 60 * 60


async def test_redis_errors_fall_back_to_memory():
    redis = AsyncMock()
    redis.get.side_effect = RedisConnectionError("down")
    redis.set.side_effect = RedisConnectionError("down")
    cache = TwoTierCache(redis)

    await cache.set(CacheNamespace.search, "k", "v", ttl=60)
    assert await cache.get(CacheNamespace.search, "k") == "v"


async def test_redis_miss_checks_memory():
    redis = AsyncMock()
    redis.get.return_value = None
    cache = TwoTierCache(redis)
    await cache.set(CacheNamespace.search, "k", "v", ttl=60)
    assert await cache.get(CacheNamespace.search, "k") == "v"
    assert await cache.get(CacheNamespace.search, "missing", MISSING) is MISSING


async def test_close_is_idempotent():
    redis = AsyncMock()
    cache = TwoTierCache(redis)
    await cache.close()
    await cache.close()
    redis.aclose.assert_awaited_once()
    assert not cache.durable


def test_create_redis_without_url():
    assert create_redis("") is None


def test_create_redis_with_url():
    client = create_redis("redis://localhost:6379/0")
    assert client is not None


@pytest.mark.parametrize("namespace", list(CacheNamespace))
async def test_cached_none_is_not_a_miss(namespace):
    cache = TwoTierCache()
    await cache.set(namespace, "k", None, ttl=60)
    assert await cache.get(namespace, "k", MISSING) is None
