"""OpenWeatherMap client and cached city lookup.

Fetches current conditions for a city name and flattens the vendor payload
into a stable attribute set. Results are cached per case-folded city name.
"""

import logging
from datetime import datetime, timezone

import httpx

from errors import CityNotFoundError, MissingApiKeyError, MissingCityError, UpstreamError
from services.cache import BoundedTTLCache

logger = logging.getLogger(__name__)

ICON_URL = "https://openweathermap.org/img/wn/{icon}@2x.png"


class OpenWeatherClient:
    """Thin async wrapper around the Current Weather endpoint."""

    def __init__(
        self,
        api_key: str | None,
        base_url: str,
        timeout: float = 10,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport

    async def fetch(self, city: str) -> dict:
        """Return the raw vendor payload for *city*."""
        if not self.api_key:
            raise MissingApiKeyError()

        params = {"q": city, "appid": self.api_key, "units": "metric"}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.get(self.base_url, params=params)
        except httpx.HTTPError as e:
            logger.error("Weather fetch failed for %s: %s", city, e)
            raise UpstreamError(body=str(e)) from e

        if resp.status_code == 404:
            raise CityNotFoundError(city)
        if resp.is_error:
            logger.warning("Vendor returned %d for %s", resp.status_code, city)
            raise UpstreamError(status=resp.status_code, body=resp.text)
        try:
            return resp.json()
        except ValueError as e:
            logger.error("Vendor returned non-JSON body for %s: %s", city, e)
            raise UpstreamError(status=resp.status_code, body=resp.text) from e


def _local_iso(epoch: int | None, offset_seconds: int | None) -> str | None:
    if not epoch:
        return None
    shifted = datetime.fromtimestamp(epoch + (offset_seconds or 0), tz=timezone.utc)
    return shifted.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def normalize_weather(vendor: dict) -> dict:
    """Map an OpenWeatherMap payload to the attributes we serve.

    Missing vendor sections map to None. ``sunrise_utc``/``sunset_utc`` carry
    the city's local wall-clock time (UTC epoch shifted by the city's offset).
    """
    sys_ = vendor.get("sys") or {}
    main = vendor.get("main") or {}
    wind = vendor.get("wind") or {}
    conditions = vendor.get("weather") or []
    first = conditions[0] if conditions else {}
    offset = vendor.get("timezone")

    return {
        "city": vendor.get("name"),
        "country": sys_.get("country"),
        "coords": vendor.get("coord"),
        "timezone_seconds": offset,
        "weather_main": first.get("main"),
        "weather_description": first.get("description"),
        "icon": ICON_URL.format(icon=first["icon"]) if first.get("icon") else None,
        "temperature_c": main.get("temp"),
        "feels_like_c": main.get("feels_like"),
        "temp_min_c": main.get("temp_min"),
        "temp_max_c": main.get("temp_max"),
        "pressure_hpa": main.get("pressure"),
        "humidity_percent": main.get("humidity"),
        "wind_speed_mps": wind.get("speed"),
        "wind_deg": wind.get("deg"),
        "sunrise_utc": _local_iso(sys_.get("sunrise"), offset),
        "sunset_utc": _local_iso(sys_.get("sunset"), offset),
        "vendor_raw": vendor,
    }


def cache_key(city: str) -> str:
    return city.strip().lower()


async def lookup_weather(
    city: str | None, cache: BoundedTTLCache, client: OpenWeatherClient
) -> tuple[dict, bool]:
    """Return ``(data, cached)`` for *city*, fetching upstream on a miss."""
    city = (city or "").strip()
    if not city:
        raise MissingCityError()

    key = cache_key(city)
    cached = cache.get(key)
    if cached is not None:
        logger.debug("Cache hit for %s", key)
        return cached, True

    logger.debug("Cache miss for %s", key)
    data = normalize_weather(await client.fetch(city))
    cache.set(key, data)
    return data, False
