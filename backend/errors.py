"""Custom exceptions and centralized FastAPI error handlers."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class WeatherProxyError(Exception):
    """Base exception with HTTP status code."""

    def __init__(self, message: str, status_code: int = 500, **extra):
        super().__init__(message)
        self.status_code = status_code
        self.extra = extra


class ConfigurationError(WeatherProxyError):
    def __init__(self, message: str):
        super().__init__(message, status_code=500)


class MissingCityError(WeatherProxyError):
    def __init__(self):
        super().__init__("Missing required query parameter 'city'.", status_code=400)


class MissingApiKeyError(WeatherProxyError):
    def __init__(self):
        super().__init__(
            "Server not configured with OPENWEATHERMAP_API_KEY. See README.",
            status_code=500,
        )


class CityNotFoundError(WeatherProxyError):
    def __init__(self, city: str):
        super().__init__(f"City '{city}' not found by vendor.", status_code=404)


class UpstreamError(WeatherProxyError):
    """Vendor answered with a non-success status, or could not be reached."""

    def __init__(self, status: int | None = None, body: str = ""):
        super().__init__("Vendor API error", status_code=502, status=status, body=body)


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app."""

    @app.exception_handler(WeatherProxyError)
    async def handle_weather_proxy_error(_request: Request, exc: WeatherProxyError):
        return JSONResponse({"error": str(exc), **exc.extra}, status_code=exc.status_code)

    @app.exception_handler(ValueError)
    async def handle_value_error(_request: Request, exc: ValueError):
        return JSONResponse({"error": str(exc)}, status_code=400)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return JSONResponse(
            {"error": "Internal server error", "detail": str(exc)},
            status_code=500,
        )
