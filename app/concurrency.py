from __future__ import annotations

import asyncio
import logging
from collections import deque
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def run_bounded(
    tasks: Sequence[Callable[[], Awaitable[T]]],
    max_concurrent: int,
) -> list[T | Exception]:
    """Run task factories with at most ``max_concurrent`` in flight.

    A fixed set of workers drains a shared queue, so the next task starts as
    soon as any running one settles. A failing task leaves its exception in
    its slot and does not cancel the others. Results keep input order.
    """
    if max_concurrent < 1:
        raise ValueError(f"max_concurrent must be >= 1, got {max_concurrent}")

    results: list[T | Exception | None] = [None] * len(tasks)
    queue = deque(enumerate(tasks))

    async def worker() -> None:
        while queue:
            index, factory = queue.popleft()
            try:
                results[index] = await factory()
            except Exception as exc:
                logger.debug("Bounded task %d failed: %s", index, exc)
                results[index] = exc

    await asyncio.gather(*(worker() for _ in range(min(max_concurrent, len(tasks)))))
    return results  # type: ignore[return-value]
