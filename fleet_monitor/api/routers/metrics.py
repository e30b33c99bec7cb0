"""Dashboard metrics endpoint — jobs, backends, KPIs, charts and trend reports."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query

from ...engine.records import ValidationError
from ..deps.providers import get_orchestrator
from ..errors import TransportError
from ..schemas.telemetry import MetricsResponse
from ..services.telemetry_service import TelemetryOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["metrics"])


@router.get("/metrics", response_model=MetricsResponse, response_model_exclude_none=True)
async def get_metrics(
    demo: bool = Query(False, description="Serve synthetic data instead of the live fleet API"),
    force: bool = Query(False, description="Bypass the synthetic cache and any in-flight refresh"),
    session: str = Query("default", max_length=128, description="Caller context for refresh coalescing"),
    orchestrator: TelemetryOrchestrator = Depends(get_orchestrator),
) -> MetricsResponse:
    try:
        return await orchestrator.get_report(demo=demo, force=force, session=session)
    except ValidationError as exc:
        raise TransportError(f"Live fleet API returned malformed records: {exc}") from exc
