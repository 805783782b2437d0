"""FastAPI application entry point for the weather proxy."""

import logging
import os
import sys

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException

from config import Settings, settings
from errors import register_error_handlers
from services.cache import BoundedTTLCache
from services.weather import OpenWeatherClient

# Structured logging: JSON for production, human-readable for local
if settings.is_production:
    logging.basicConfig(
        level=logging.INFO,
        format='{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}',
        stream=sys.stdout,
    )
else:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

logger = logging.getLogger(__name__)


class SPAStaticFiles(StaticFiles):
    """Static files that answer unknown paths with index.html for client-side routing."""

    async def get_response(self, path: str, scope):
        try:
            response = await super().get_response(path, scope)
        except HTTPException as exc:
            if exc.status_code != 404:
                raise
            return await super().get_response("index.html", scope)
        if response.status_code == 404:
            return await super().get_response("index.html", scope)
        return response


def create_app(
    app_settings: Settings | None = None,
    weather_client: OpenWeatherClient | None = None,
) -> FastAPI:
    app_settings = app_settings or settings
    app = FastAPI(title="Weather Proxy API", version="1.0.0")

    # One cache per app instance; lives as long as the app.
    app.state.weather_cache = BoundedTTLCache(
        max_entries=app_settings.cache_max_entries,
        ttl_seconds=app_settings.cache_ttl_seconds,
    )
    app.state.weather_client = weather_client or OpenWeatherClient(
        api_key=app_settings.openweathermap_api_key,
        base_url=app_settings.openweather_base_url,
        timeout=app_settings.upstream_timeout_seconds,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Security headers
    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        if app_settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response

    # Centralized error handlers
    register_error_handlers(app)

    from routes.health import router as health_router
    from routes.weather import router as weather_router

    app.include_router(health_router)
    app.include_router(weather_router)

    # Frontend last so API routes take precedence
    if os.path.isdir(app_settings.static_dir):
        app.mount("/", SPAStaticFiles(directory=app_settings.static_dir, html=True), name="static")

    @app.on_event("startup")
    async def _validate_config() -> None:
        missing = app_settings.validate()
        if missing:
            logger.warning("Missing env vars (weather lookups will fail): %s", ", ".join(missing))
        logger.info(
            "Cache TTL seconds: %s, max entries: %s",
            app_settings.cache_ttl_seconds,
            app_settings.cache_max_entries,
        )

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.port)
