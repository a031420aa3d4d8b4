"""
zip_weather.api.routers.health

Health endpoint, mounted on both services.

Responsibilities:
- Provide a liveness endpoint (`/healthz`).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from zip_weather.api.deps import settings_dep
from zip_weather.settings import ServiceSettings

router = APIRouter()


@router.get("/healthz")
async def healthz(settings: ServiceSettings = Depends(settings_dep)) -> dict[str, str]:
    # Liveness: process is up and serving HTTP.
    return {"status": "ok", "service": settings.service_name}


# --- Module Notes -----------------------------------------------------------
# No readiness check: neither service owns a dependency it can check cheaply
# (upstream APIs are third-party and calling them per check would burn quota).
