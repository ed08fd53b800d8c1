import logging
import sys
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from app.cache import TwoTierCache, create_redis
from app.config import Settings
from app.exceptions.custom import GeocodeError, ProviderError
from app.exceptions.handlers import geocode_error_handler, provider_error_handler
from app.routers.geocode import router as geocode_router
from app.routers.search import router as search_router
from app.services.fetcher import PageFetcher
from app.services.geocoder import GeocodeService
from app.services.policy_scraper import PolicyScraperService
from app.services.providers import MockProvider, build_provider
from app.services.rate_limiter import RateLimiter
from app.services.renderer import HeadlessRenderer
from app.services.search import SearchService


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)

    cache = TwoTierCache(create_redis(settings.redis_url))
    renderer = HeadlessRenderer(headless=settings.render_headless)

    async with httpx.AsyncClient(timeout=30.0) as client:
        fetcher = PageFetcher(
            client,
            RateLimiter(settings.min_request_interval),
            renderer,
            timeout=settings.fetch_timeout,
            render_timeout_ms=settings.render_timeout_ms,
            render_retries=settings.render_retries,
        )
        policy_scraper = PolicyScraperService(fetcher, cache, policy_ttl=settings.policy_cache_ttl)
        provider = build_provider(
            settings.active_provider, settings, fetcher, policy_scraper, cache
        )

        fallback = None
        if settings.search_fallback_to_mock and provider.name != MockProvider.name:
            fallback = MockProvider()

        app.state.search_service = SearchService(
            provider, cache, fallback=fallback, api_ttl=settings.api_cache_ttl
        )
        app.state.geocode_service = GeocodeService(client)

        try:
            yield
        finally:
            await renderer.shutdown()
            await cache.close()


app = FastAPI(title="Hotel Age Search", lifespan=lifespan)

app.add_exception_handler(ProviderError, provider_error_handler)
app.add_exception_handler(GeocodeError, geocode_error_handler)

app.include_router(search_router)
app.include_router(geocode_router)
