import logging
from datetime import datetime, timezone

from app.cache import DEFAULT_TTLS, CacheNamespace, TwoTierCache
from app.exceptions.custom import ProviderError
from app.schemas.hotel import HotelRecord, SearchParams
from app.schemas.responses import SearchMeta, SearchResponse
from app.services.providers import HotelProvider

logger = logging.getLogger(__name__)

ELIGIBLE_MAX_AGE = 18


def classify(
    hotels: list[HotelRecord],
) -> tuple[list[HotelRecord], list[HotelRecord], list[HotelRecord]]:
    """Split into (eligible, unknown, not_eligible) by minimum check-in age."""
    eligible: list[HotelRecord] = []
    unknown: list[HotelRecord] = []
    not_eligible: list[HotelRecord] = []
    for hotel in hotels:
        if hotel.min_check_in_age is None:
            unknown.append(hotel)
        elif hotel.min_check_in_age <= ELIGIBLE_MAX_AGE:
            eligible.append(hotel)
        else:
            not_eligible.append(hotel)
    return eligible, unknown, not_eligible


class SearchService:
    def __init__(
        self,
        provider: HotelProvider,
        cache: TwoTierCache,
        fallback: HotelProvider | None = None,
        api_ttl: int = DEFAULT_TTLS[CacheNamespace.api],
    ):
        self._provider = provider
        self._cache = cache
        self._fallback = fallback
        self._api_ttl = api_ttl

    @property
    def provider_name(self) -> str:
        return self._provider.name

    async def search(self, params: SearchParams) -> SearchResponse:
        key = params.cache_key(self._provider.name)
        cached = await self._cache.get(CacheNamespace.api, key)
        provider_name = self._provider.name

        if cached is not None:
            hotels = [HotelRecord.model_validate(h) for h in cached]
        else:
            hotels, provider_name = await self._fetch(params)
            if hotels and provider_name == self._provider.name:
                await self._cache.set(
                    CacheNamespace.api,
                    key,
                    [h.model_dump(mode="json") for h in hotels],
                    self._api_ttl,
                )

        eligible, unknown, not_eligible = classify(hotels)
        return SearchResponse(
            eligible=eligible,
            unknown=unknown,
            not_eligible=not_eligible,
            meta=SearchMeta(
                provider=provider_name,
                fetched_at=datetime.now(timezone.utc).isoformat(),
            ),
        )

    async def _fetch(self, params: SearchParams) -> tuple[list[HotelRecord], str]:
        try:
            return await self._provider.search_nearby(params), self._provider.name
        except ProviderError as exc:
            error = exc
        except Exception as exc:
            logger.exception("Provider %s failed", self._provider.name)
            error = ProviderError(str(exc) or type(exc).__name__)

        if self._fallback is None:
            raise error
        logger.warning(
            "Provider %s failed (%s), answering from %s",
            self._provider.name, error.message, self._fallback.name,
        )
        return await self._fallback.search_nearby(params), self._fallback.name
