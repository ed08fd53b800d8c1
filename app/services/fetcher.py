import logging

import httpx

from app.mappers.challenge import looks_like_challenge
from app.schemas.fetch import FetchResult, FetchStatus
from app.services.rate_limiter import RateLimiter
from app.services.renderer import HeadlessRenderer

logger = logging.getLogger(__name__)

_TIMEOUT = 10.0
_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/124.0.0.0 Safari/537.36"
)


class PageFetcher:
    def __init__(
        self,
        client: httpx.AsyncClient,
        rate_limiter: RateLimiter,
        renderer: HeadlessRenderer | None = None,
        timeout: float = _TIMEOUT,
        render_timeout_ms: int = 15_000,
        render_retries: int = 2,
    ):
        self._client = client
        self._rate_limiter = rate_limiter
        self._renderer = renderer
        self._timeout = timeout
        self._render_timeout_ms = render_timeout_ms
        self._render_retries = render_retries

    async def fetch(self, url: str) -> FetchResult:
        """GET a page. Never raises.

        Non-2xx bodies are still returned so callers can inspect them. A
        challenge page is retried through the headless renderer; if that
        fails too, the original body comes back with status ``challenge``.
        """
        await self._rate_limiter.wait_for_slot(url)
        try:
            resp = await self._client.get(
                url,
                follow_redirects=True,
                timeout=self._timeout,
                headers={
                    "User-Agent": _USER_AGENT,
                    "Referer": url,
                    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
                    "Accept-Language": "en-US,en;q=0.9",
                },
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.debug("Failed to fetch %s: %s", url, exc)
            return FetchResult(url=url, status=FetchStatus.transport_error)

        html = resp.text
        if not resp.is_success:
            logger.warning("Fetch %s returned HTTP %d", url, resp.status_code)

        if looks_like_challenge(html):
            logger.info("Challenge page detected at %s, retrying headless", url)
            rendered = await self.render(url, block_heavy_resources=True)
            if rendered.ok:
                return rendered
            return FetchResult(
                url=url, html=html, status=FetchStatus.challenge, status_code=resp.status_code
            )

        status = FetchStatus.ok if resp.is_success else FetchStatus.http_error
        return FetchResult(url=url, html=html, status=status, status_code=resp.status_code)

    async def fetch_html(self, url: str) -> str | None:
        return (await self.fetch(url)).html

    async def render(
        self,
        url: str,
        *,
        wait_for_selector: str | None = None,
        block_heavy_resources: bool = False,
    ) -> FetchResult:
        """Headless render with this fetcher's timeout/retry settings."""
        if self._renderer is None:
            return FetchResult(url=url, status=FetchStatus.unavailable)
        return await self._renderer.render(
            url,
            timeout_ms=self._render_timeout_ms,
            retries=self._render_retries,
            wait_for_selector=wait_for_selector,
            block_heavy_resources=block_heavy_resources,
        )
