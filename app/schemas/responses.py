from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.schemas.hotel import HotelRecord


class SearchMeta(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    provider: str
    fetched_at: str  # ISO 8601, UTC


class SearchResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    eligible: list[HotelRecord] = []  # min age <= 18
    unknown: list[HotelRecord] = []  # no age found
    not_eligible: list[HotelRecord] = []  # min age > 18
    meta: SearchMeta


class HealthResponse(BaseModel):
    status: str
    provider: str
