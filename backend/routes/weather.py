"""City weather lookup route, served from the cache when possible."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query, Request

from services.cache import BoundedTTLCache
from services.weather import OpenWeatherClient, lookup_weather

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


def get_cache(request: Request) -> BoundedTTLCache:
    return request.app.state.weather_cache


def get_weather_client(request: Request) -> OpenWeatherClient:
    return request.app.state.weather_client


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@router.get("/weather")
async def weather(
    city: str | None = Query(None),
    cache: BoundedTTLCache = Depends(get_cache),
    client: OpenWeatherClient = Depends(get_weather_client),
) -> dict:
    """Current conditions for a city. ``cached`` tells whether upstream was skipped."""
    data, cached = await lookup_weather(city, cache, client)
    return {"cached": cached, "fetched_at": utc_now_iso(), "data": data}
