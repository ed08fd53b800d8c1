import logging
import math

from fastapi import APIRouter, HTTPException
from pydantic import ValidationError

from app.dependencies import SearchDep
from app.schemas.hotel import SearchParams
from app.schemas.responses import HealthResponse, SearchResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _parse_coord(raw: str | None) -> float | None:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


@router.get("/search", response_model=SearchResponse)
async def search_hotels(
    service: SearchDep,
    lat: str | None = None,
    lng: str | None = None,
    radius: float = 20.0,
    limit: int = 50,
) -> SearchResponse:
    lat_value = _parse_coord(lat)
    lng_value = _parse_coord(lng)
    if lat_value is None or lng_value is None:
        raise HTTPException(status_code=400, detail="lat,lng required")

    try:
        params = SearchParams(lat=lat_value, lng=lng_value, radius_km=radius, limit=limit)
    except ValidationError as exc:
        fields = ", ".join(str(err["loc"][-1]) for err in exc.errors())
        raise HTTPException(status_code=400, detail=f"invalid search parameters: {fields}")

    return await service.search(params)


@router.get("/health", response_model=HealthResponse)
async def health(service: SearchDep) -> HealthResponse:
    return HealthResponse(status="ok", provider=service.provider_name)
