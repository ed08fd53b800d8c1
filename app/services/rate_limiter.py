import asyncio
import logging
import time
from collections import defaultdict
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

MIN_INTERVAL = 0.4  # seconds between requests to the same host


class RateLimiter:
    """Per-host minimum spacing between outbound requests.

    Callers for the same host queue on that host's lock; hosts never delay
    each other.
    """

    def __init__(self, min_interval: float = MIN_INTERVAL):
        self._min_interval = min_interval
        self._last_request: dict[str, float] = {}
        self._locks: defaultdict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    async def wait_for_slot(self, url: str) -> None:
        try:
            host = urlparse(url).hostname
        except ValueError:
            logger.debug("Rate limiter skipping malformed URL %r", url)
            return
        if not host:
            return

        async with self._locks[host]:
            last = self._last_request.get(host)
            if last is not None:
                wait = self._min_interval - (time.monotonic() - last)
                if wait > 0:
                    logger.debug("Throttling %s for %.3fs", host, wait)
                    await asyncio.sleep(wait)
            self._last_request[host] = time.monotonic()

    def reset(self) -> None:
        self._last_request.clear()
