from typing import Annotated

from fastapi import Depends, Request

from app.services.geocoder import GeocodeService
from app.services.search import SearchService


def get_search_service(request: Request) -> SearchService:
    return request.app.state.search_service


def get_geocode_service(request: Request) -> GeocodeService:
    return request.app.state.geocode_service


SearchDep = Annotated[SearchService, Depends(get_search_service)]
GeocodeDep = Annotated[GeocodeService, Depends(get_geocode_service)]
