import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from .custom import GeocodeError, ProviderError

logger = logging.getLogger(__name__)


async def provider_error_handler(_request: Request, exc: ProviderError) -> JSONResponse:
    logger.error("Search provider error: %s (status=%s)", exc.message, exc.status_code)
    return JSONResponse(
        status_code=502,
        content={"detail": f"Search provider error: {exc.message}"},
    )


async def geocode_error_handler(_request: Request, exc: GeocodeError) -> JSONResponse:
    logger.warning("Geocode error: %s (status=%s)", exc.message, exc.status_code)
    return JSONResponse(
        status_code=exc.status_code or 502,
        content={"detail": f"Geocode error: {exc.message}"},
    )
