from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Confidence(StrEnum):
    explicit = "explicit"  # verified field from the provider
    parsed = "parsed"  # regex-extracted from policy text
    override = "override"
    crowd = "crowd"
    unknown = "unknown"


class Source(StrEnum):
    mock = "mock"
    booking = "booking"
    expedia = "expedia"


class ListingSummary(BaseModel):
    id: str  # canonical detail URL
    name: str
    lat: float | None = None
    lng: float | None = None
    detail_url: str
    address: str | None = None


class HotelRecord(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    lat: float
    lng: float
    address: str | None = None
    rating: float | None = None  # 0-5
    price_nightly: float | None = None
    distance_km: float
    min_check_in_age: int | None = None
    policy_text: str | None = None
    confidence: Confidence = Confidence.unknown
    source: Source
    detail_url: str | None = None
    thumbnail_url: str | None = None
    photos: list[str] = []


class SearchParams(BaseModel):
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)
    radius_km: float = Field(default=20.0, gt=0)
    limit: int = Field(default=50, ge=1, le=200)

    def cache_key(self, prefix: str) -> str:
        return f"{prefix}:{self.lat:.4f},{self.lng:.4f}:{self.radius_km:g}:{self.limit}"
