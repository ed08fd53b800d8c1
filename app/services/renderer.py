import asyncio
import logging

from app.schemas.fetch import FetchResult, FetchStatus

logger = logging.getLogger(__name__)

_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/124.0.0.0 Safari/537.36"
)
_VIEWPORT = {"width": 1280, "height": 800}
_HEAVY_RESOURCE_TYPES = frozenset({"image", "font", "media", "stylesheet"})


class RendererUnavailable(Exception):
    """The headless engine cannot run in this environment."""


async def _block_heavy(route) -> None:
    if route.request.resource_type in _HEAVY_RESOURCE_TYPES:
        await route.abort()
    else:
        await route.continue_()


async def _safe_close(page) -> None:
    if page is None:
        return
    try:
        await page.close()
    except Exception:
        logger.debug("Error closing page", exc_info=True)


class HeadlessRenderer:
    """Shared Chromium session for pages that need a real browser.

    The browser and its single context are launched on first use; the lock
    makes concurrent first callers share one launch. Each render gets its own
    page, which is always closed afterwards.
    """

    def __init__(
        self,
        headless: bool = True,
        user_agent: str = _USER_AGENT,
        viewport: dict | None = None,
    ):
        self._headless = headless
        self._user_agent = user_agent
        self._viewport = viewport or _VIEWPORT
        self._playwright = None
        self._browser = None
        self._context = None
        self._init_lock = asyncio.Lock()
        self._unavailable: str | None = None

    @property
    def started(self) -> bool:
        return self._context is not None

    async def _launch(self):
        try:
            from playwright.async_api import async_playwright
        except ImportError:
            logger.warning("playwright not installed, headless rendering disabled")
            raise RendererUnavailable("playwright-missing")

        playwright = None
        try:
            playwright = await async_playwright().start()
            browser = await playwright.chromium.launch(
                headless=self._headless, args=["--no-sandbox"]
            )
            context = await browser.new_context(
                user_agent=self._user_agent, viewport=self._viewport
            )
        except Exception as exc:
            if playwright is not None:
                await playwright.stop()
            logger.warning("Headless browser launch failed: %s", exc)
            raise RendererUnavailable(str(exc)) from exc

        self._playwright = playwright
        self._browser = browser
        self._context = context
        logger.info("Headless browser started")
        return context

    async def _get_context(self):
        if self._unavailable:
            raise RendererUnavailable(self._unavailable)
        if self._context is not None:
            return self._context
        async with self._init_lock:
            if self._unavailable:
                raise RendererUnavailable(self._unavailable)
            if self._context is None:
                try:
                    return await self._launch()
                except RendererUnavailable as exc:
                    # not retried for the life of this renderer
                    self._unavailable = str(exc) or "unavailable"
                    raise
        return self._context

    async def render(
        self,
        url: str,
        *,
        timeout_ms: int = 15_000,
        retries: int = 2,
        wait_for_selector: str | None = None,
        settle_ms: int = 300,
        block_heavy_resources: bool = False,
    ) -> FetchResult:
        """Load ``url`` in the shared browser and return the rendered HTML."""
        attempts = max(1, retries)
        for attempt in range(attempts):
            page = None
            try:
                context = await self._get_context()
                page = await context.new_page()
                if block_heavy_resources:
                    await page.route("**/*", _block_heavy)

                await page.goto(url, wait_until="domcontentloaded", timeout=timeout_ms)

                if wait_for_selector:
                    try:
                        await page.wait_for_selector(
                            wait_for_selector, timeout=timeout_ms
                        )
                    except Exception:
                        logger.debug("Selector %s not found on %s", wait_for_selector, url)
                if settle_ms > 0:
                    await page.wait_for_timeout(settle_ms)

                html = await page.content()
                return FetchResult(url=url, html=html, status=FetchStatus.ok)
            except RendererUnavailable:
                return FetchResult(url=url, status=FetchStatus.unavailable)
            except Exception as exc:
                logger.warning(
                    "Headless render attempt %d/%d failed for %s: %s",
                    attempt + 1, attempts, url, exc,
                )
                await _safe_close(page)
                page = None
                if attempt + 1 < attempts:
                    await asyncio.sleep(0.25 + attempt * 0.3)
            finally:
                await _safe_close(page)

        logger.info("Headless render gave up on %s", url)
        return FetchResult(url=url, status=FetchStatus.failed)

    async def shutdown(self) -> None:
        context, browser, playwright = self._context, self._browser, self._playwright
        self._context = self._browser = self._playwright = None
        for closer in (
            getattr(context, "close", None),
            getattr(browser, "close", None),
            getattr(playwright, "stop", None),
        ):
            if closer is None:
                continue
            try:
                await closer()
            except Exception:
                logger.debug("Error during headless shutdown", exc_info=True)
