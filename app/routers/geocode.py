from fastapi import APIRouter, HTTPException

from app.dependencies import GeocodeDep
from app.schemas.geocode import GeocodeResult

router = APIRouter()


@router.get("/geocode", response_model=GeocodeResult)
async def geocode(service: GeocodeDep, q: str | None = None) -> GeocodeResult:
    if not q or not q.strip():
        raise HTTPException(status_code=400, detail="q required")
    return await service.geocode(q.strip())
