import asyncio
import logging
from abc import ABC, abstractmethod

from app.cache import DEFAULT_TTLS, CacheNamespace, TwoTierCache
from app.concurrency import run_bounded
from app.config import Settings
from app.data.mock_hotels import MOCK_HOTELS
from app.mappers.geo import haversine_km
from app.schemas.hotel import Confidence, HotelRecord, ListingSummary, SearchParams, Source
from app.services.fetcher import PageFetcher
from app.services.policy_scraper import PolicyScraperService
from app.sites import get_site
from app.sites.base import SiteStrategy

logger = logging.getLogger(__name__)


def filter_sort_limit(records: list[HotelRecord], params: SearchParams) -> list[HotelRecord]:
    """Keep records within the radius, nearest first, at most ``limit``."""
    within = [r for r in records if r.distance_km <= params.radius_km]
    within.sort(key=lambda r: r.distance_km)
    return within[: params.limit]


class HotelProvider(ABC):
    name: str

    @abstractmethod
    async def search_nearby(self, params: SearchParams) -> list[HotelRecord]:
        ...


class MockProvider(HotelProvider):
    name = "mock"

    def __init__(self, hotels: list[dict] | None = None):
        self._hotels = hotels if hotels is not None else MOCK_HOTELS

    async def search_nearby(self, params: SearchParams) -> list[HotelRecord]:
        records = [
            HotelRecord(
                **hotel,
                source=Source.mock,
                distance_km=haversine_km(params.lat, params.lng, hotel["lat"], hotel["lng"]),
            )
            for hotel in self._hotels
        ]
        return filter_sort_limit(records, params)


class ScrapingProvider(HotelProvider):
    """Scraped listings from one travel site, enriched with policy text and photos.

    cache lookup -> site search -> enrichment (bounded) -> filter/sort/limit
    -> cache store. A failed site search yields an empty list; listings
    without coordinates are dropped since distance is required.
    """

    def __init__(
        self,
        site: SiteStrategy,
        fetcher: PageFetcher,
        policy_scraper: PolicyScraperService,
        cache: TwoTierCache,
        *,
        enabled: bool = True,
        concurrency: int = 4,
        search_ttl: int = DEFAULT_TTLS[CacheNamespace.search],
    ):
        self._site = site
        self._fetcher = fetcher
        self._policy_scraper = policy_scraper
        self._cache = cache
        self._enabled = enabled
        self._concurrency = concurrency
        self._search_ttl = search_ttl

    @property
    def name(self) -> str:
        return self._site.source.value

    async def search_nearby(self, params: SearchParams) -> list[HotelRecord]:
        if not self._enabled:
            logger.info("Scraping disabled for %s", self.name)
            return []

        key = params.cache_key(self.name)
        cached = await self._cache.get(CacheNamespace.search, key)
        if cached is not None:
            logger.debug("Search cache hit for %s", key)
            return [HotelRecord.model_validate(r) for r in cached]

        try:
            listings = await self.search_listings(params)
        except Exception:
            logger.exception("%s site search failed", self.name)
            return []

        candidates: list[tuple[ListingSummary, float]] = []
        for listing in listings:
            if listing.lat is None or listing.lng is None:
                continue
            distance = haversine_km(params.lat, params.lng, listing.lat, listing.lng)
            if distance <= params.radius_km:
                candidates.append((listing, distance))
        candidates.sort(key=lambda pair: pair[1])
        candidates = candidates[: params.limit]
        logger.info(
            "%s: %d listings parsed, %d within %.1f km",
            self.name, len(listings), len(candidates), params.radius_km,
        )

        outcomes = await run_bounded(
            [lambda c=c: self._enrich(*c) for c in candidates], self._concurrency
        )
        records: list[HotelRecord] = []
        for (listing, distance), outcome in zip(candidates, outcomes):
            if isinstance(outcome, Exception):
                logger.warning("Enrichment failed for %s: %s", listing.detail_url, outcome)
                outcome = self._to_record(listing, distance)
            records.append(outcome)

        records = filter_sort_limit(records, params)
        if records:
            await self._cache.set(
                CacheNamespace.search,
                key,
                [r.model_dump(mode="json") for r in records],
                self._search_ttl,
            )
        return records

    async def search_listings(self, params: SearchParams) -> list[ListingSummary]:
        url = self._site.build_search_url(params.lat, params.lng, params.radius_km)
        page = await self._fetcher.fetch(url)
        listings = self._site.parse_listings(page.html, url) if page.html else []
        if listings:
            return listings

        logger.info("No %s listings from plain fetch, escalating to headless render", self.name)
        selector = ", ".join(self._site.search_selectors) or None
        rendered = await self._fetcher.render(url, wait_for_selector=selector)
        if not rendered.ok:
            return []
        return self._site.parse_listings(rendered.html, url)

    async def _enrich(self, listing: ListingSummary, distance: float) -> HotelRecord:
        policy, photos = await asyncio.gather(
            self._policy_scraper.scrape_policy(listing.detail_url, self._site),
            self._policy_scraper.scrape_photos(listing.detail_url),
        )
        return self._to_record(
            listing, distance, min_age=policy.min_age, policy_text=policy.text, photos=photos
        )

    def _to_record(
        self,
        listing: ListingSummary,
        distance: float,
        *,
        min_age: int | None = None,
        policy_text: str | None = None,
        photos: list[str] | None = None,
    ) -> HotelRecord:
        photos = photos or []
        return HotelRecord(
            id=listing.id,
            name=listing.name,
            lat=listing.lat,
            lng=listing.lng,
            address=listing.address,
            distance_km=distance,
            min_check_in_age=min_age,
            policy_text=policy_text,
            confidence=Confidence.parsed if min_age is not None else Confidence.unknown,
            source=self._site.source,
            detail_url=listing.detail_url,
            thumbnail_url=photos[0] if photos else None,
            photos=photos,
        )


def build_provider(
    name: str,
    settings: Settings,
    fetcher: PageFetcher,
    policy_scraper: PolicyScraperService,
    cache: TwoTierCache,
) -> HotelProvider:
    """Provider for ``name``; unknown names fall back to the mock dataset."""
    if name == MockProvider.name:
        return MockProvider()
    try:
        site = get_site(name)
    except ValueError:
        logger.warning("Unknown provider %r, using mock", name)
        return MockProvider()
    return ScrapingProvider(
        site,
        fetcher,
        policy_scraper,
        cache,
        enabled=settings.scraping_enabled_for(name),
        concurrency=settings.enrich_concurrency,
        search_ttl=settings.search_cache_ttl,
    )
