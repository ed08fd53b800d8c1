"""Tests for run_bounded."""

import asyncio

import pytest

from app.concurrency import run_bounded


async def test_never_exceeds_limit_and_runs_everything_once():
    in_flight = 0
    peak = 0
    calls: list[int] = []

    def make(i: int):
        async def task():
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            calls.append(i)
            await asyncio.sleep(0.01 * (i % 3))
            in_flight -= 1
            return i * 10

        return task

    results = await run_bounded([make(i) for i in range(10)], max_concurrent=3)

    assert results == [i * 10 for i in range(10)]
    assert peak == 3
    assert sorted(calls) == list(range(10))


async def test_failure_does_not_cancel_others():
    async def ok():
        await asyncio.sleep(0.01)
        return "ok"

    async def boom():
        raise RuntimeError("boom")

    results = await run_bounded([ok, boom, ok, boom, ok], max_concurrent=2)

    assert results[0] == results[2] == results[4] == "ok"
    assert isinstance(results[1], RuntimeError)
    assert isinstance(results[3], RuntimeError)


async def test_next_task_starts_when_one_settles():
    started: list[str] = []
    release_slow = asyncio.Event()

    async def slow():
        started.append("slow")
        await release_slow.wait()
        return "slow"

    async def fast():
        started.append("fast")
        return "fast"

    async def queued():
        started.append("queued")
        release_slow.set()
        return "queued"

    results = await run_bounded([slow, fast, queued], max_concurrent=2)

    assert results == ["slow", "fast", "queued"]
    # queued starts while slow is still running
    assert started == ["slow", "fast", "queued"]


async def test_empty_task_list():
    assert await run_bounded([], max_concurrent=4) == []


async def test_limit_larger_than_task_count():
    async def one():
        return 1

    assert await run_bounded([one, one], max_concurrent=10) == [1, 1]


async def test_invalid_limit():
    with pytest.raises(ValueError):
        await run_bounded([], max_concurrent=0)
