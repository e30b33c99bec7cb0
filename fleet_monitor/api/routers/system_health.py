"""Service health endpoint."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from ...config import AUTO_REFRESH_SECONDS
from ..cache.manager import SnapshotCache
from ..config import ApiSettings
from ..deps.providers import get_cache, get_orchestrator, get_settings
from ..schemas.envelope import ApiResponse
from ..services.telemetry_service import TelemetryOrchestrator

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
async def health(
    settings: ApiSettings = Depends(get_settings),
    cache: SnapshotCache = Depends(get_cache),
    orchestrator: TelemetryOrchestrator = Depends(get_orchestrator),
) -> ApiResponse:
    age = cache.age()
    return ApiResponse.success({
        "status": "ok",
        "backend_api_url": settings.backend_api_url,
        "report_timezone": settings.report_timezone,
        "refresh_interval_seconds": AUTO_REFRESH_SECONDS,
        "synthetic_cache": {
            "ttl_seconds": cache.ttl,
            "age_seconds": round(age, 3) if age is not None else None,
            "expired": cache.is_expired(),
        },
        "inflight_refreshes": orchestrator.inflight_count,
    })
