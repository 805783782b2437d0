"""Health and readiness check routes."""

from fastapi import APIRouter, Depends

from config import settings
from routes.weather import get_cache, utc_now_iso
from services.cache import BoundedTTLCache

router = APIRouter()


@router.get("/ready")
async def ready() -> dict:
    """Lightweight readiness check — no external calls."""
    return {"status": "ok", "service": "weather-proxy", "commit": settings.git_sha}


@router.get("/api/health")
async def health(cache: BoundedTTLCache = Depends(get_cache)) -> dict:
    """Liveness plus cache occupancy. Does not touch upstream or cache recency."""
    stats = cache.stats()
    return {
        "status": "ok",
        "now": utc_now_iso(),
        "cache": {
            "entries": stats["entries"],
            "maxEntries": stats["max_entries"],
            "ttlMillis": int(stats["ttl_seconds"] * 1000),
        },
    }
