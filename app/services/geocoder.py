import logging

import httpx

from app.data.cities import lookup_city
from app.exceptions.custom import GeocodeError
from app.schemas.geocode import GeocodeResult, NominatimPlace

logger = logging.getLogger(__name__)

NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"
# Nominatim's usage policy requires an identifying User-Agent
_USER_AGENT = "hotel-age-search/1.0 (+https://github.com/hotel-age-search)"


class GeocodeService:
    def __init__(self, client: httpx.AsyncClient):
        self._client = client

    async def geocode(self, query: str) -> GeocodeResult:
        """Coordinates for a place name: city table first, then Nominatim."""
        coords = lookup_city(query)
        if coords is not None:
            return GeocodeResult(lat=coords[0], lng=coords[1], source="cities")

        try:
            resp = await self._client.get(
                NOMINATIM_URL,
                params={"q": query, "format": "json", "limit": 1},
                headers={"User-Agent": _USER_AGENT},
            )
        except httpx.HTTPError as exc:
            raise GeocodeError(f"geocode request failed: {exc}", status_code=502) from exc

        if resp.status_code != 200:
            raise GeocodeError(f"geocode failed: {resp.status_code}", status_code=502)

        try:
            places = resp.json()
        except ValueError as exc:
            raise GeocodeError("invalid geocode response", status_code=502) from exc
        if not isinstance(places, list) or not places:
            raise GeocodeError("no results", status_code=404)

        try:
            place = NominatimPlace.model_validate(places[0])
            return GeocodeResult(lat=float(place.lat), lng=float(place.lon), source="nominatim")
        except ValueError as exc:
            logger.debug("Unusable Nominatim result for %r: %s", query, places[0])
            raise GeocodeError("invalid results", status_code=422) from exc
