from pydantic import BaseModel


class GeocodeResult(BaseModel):
    lat: float
    lng: float
    source: str  # "cities" | "nominatim"


class NominatimPlace(BaseModel):
    lat: str
    lon: str
    display_name: str | None = None
