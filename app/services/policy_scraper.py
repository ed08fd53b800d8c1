import asyncio
import logging

from bs4 import BeautifulSoup

from app.cache import DEFAULT_TTLS, MISSING, CacheNamespace, TwoTierCache
from app.mappers.image_extractor import extract_image_urls
from app.mappers.policy_extractor import finalize, needs_render, run_stages
from app.schemas.fetch import FetchResult, FetchStatus
from app.schemas.policy import PolicyExtraction
from app.services.fetcher import PageFetcher
from app.sites.base import SiteStrategy

logger = logging.getLogger(__name__)


class PolicyScraperService:
    """Policy text and photos for hotel detail pages.

    Concurrent requests for the same detail URL share one fetch.
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        cache: TwoTierCache,
        policy_ttl: int = DEFAULT_TTLS[CacheNamespace.policy],
    ):
        self._fetcher = fetcher
        self._cache = cache
        self._policy_ttl = policy_ttl
        self._inflight: dict[str, asyncio.Task] = {}

    async def scrape_policy(self, url: str, site: SiteStrategy | None = None) -> PolicyExtraction:
        """Cached policy extraction for a detail page. Best-effort, never raises."""
        cached = await self._cache.get(CacheNamespace.policy, url, MISSING)
        if cached is not MISSING:
            return PolicyExtraction.model_validate(cached) if cached else PolicyExtraction()

        try:
            result, cacheable = await self._discover(url, site)
        except Exception:
            logger.exception("Policy scrape failed for %s", url)
            return PolicyExtraction()

        if cacheable:
            await self._cache.set(CacheNamespace.policy, url, result.model_dump(), self._policy_ttl)
        return result

    async def scrape_photos(self, url: str) -> list[str]:
        """Cached photo URLs for a detail page. Best-effort, never raises."""
        key = f"photos:{url}"
        cached = await self._cache.get(CacheNamespace.policy, key, MISSING)
        if cached is not MISSING:
            return list(cached or [])

        try:
            page = await self._fetch_shared(url)
            if not page.ok:
                return []
            photos = extract_image_urls(page.html, url)
        except Exception:
            logger.exception("Photo scrape failed for %s", url)
            return []

        await self._cache.set(CacheNamespace.policy, key, photos, self._policy_ttl)
        return photos

    async def _discover(
        self, url: str, site: SiteStrategy | None
    ) -> tuple[PolicyExtraction, bool]:
        page = await self._fetch_shared(url)
        soup = BeautifulSoup(page.html, "html.parser") if page.html else None
        result = run_stages(soup) if soup is not None else None
        cacheable = page.ok
        rendered_ok = False

        if needs_render(result):
            logger.debug("Policy snippet unusable for %s, trying headless render", url)
            rendered = await self._render_with_hints(url, site)
            if rendered.ok:
                soup = BeautifulSoup(rendered.html, "html.parser")
                result = run_stages(soup)
                cacheable = rendered_ok = True
            elif rendered.status == FetchStatus.unavailable:
                logger.debug("Headless renderer unavailable for %s", url)

        final = finalize(result, soup)
        blocked = page.status == FetchStatus.challenge and not rendered_ok
        if blocked or (needs_render(result) and final.min_age is None):
            # challenge banner, inline script or nothing at all: report no text
            logger.info("No usable policy text for %s", url)
            return PolicyExtraction(stage=final.stage), False
        return final, cacheable

    async def _render_with_hints(self, url: str, site: SiteStrategy | None) -> FetchResult:
        selector = ", ".join(site.policy_selectors) if site and site.policy_selectors else None
        return await self._fetcher.render(
            url, wait_for_selector=selector, block_heavy_resources=True
        )

    async def _fetch_shared(self, url: str) -> FetchResult:
        task = self._inflight.get(url)
        if task is None:
            task = asyncio.ensure_future(self._fetcher.fetch(url))
            self._inflight[url] = task
            task.add_done_callback(lambda _: self._inflight.pop(url, None))
        return await task
