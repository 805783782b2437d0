"""Centralized configuration — all env vars in one place."""

import os

from dotenv import load_dotenv

from errors import ConfigurationError

load_dotenv()

OPENWEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value.strip())
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from e


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.cors_origins: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
        self.git_sha: str = os.getenv("GIT_SHA", "unknown")
        self.environment: str = os.getenv("ENVIRONMENT", "local")
        self.port: int = _env_int("PORT", 3000)
        self.static_dir: str = os.getenv("STATIC_DIR", "public")

        # OpenWeatherMap
        self.openweathermap_api_key: str | None = os.getenv("OPENWEATHERMAP_API_KEY") or None
        self.openweather_base_url: str = os.getenv("OPENWEATHER_BASE_URL", OPENWEATHER_URL)
        self.upstream_timeout_seconds: int = _env_int("UPSTREAM_TIMEOUT_SECONDS", 10)

        # Cache
        self.cache_ttl_seconds: int = _env_int("CACHE_TTL_SECONDS", 600)
        self.cache_max_entries: int = _env_int("CACHE_MAX_ENTRIES", 200)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def validate(self) -> list[str]:
        """Return list of missing required env vars for upstream lookups."""
        required = ["OPENWEATHERMAP_API_KEY"]
        return [var for var in required if not getattr(self, var.lower())]


settings = Settings()
