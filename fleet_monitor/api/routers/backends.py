"""Backend detail endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from ...engine.models import ConnectivityGraph
from ..deps.providers import get_orchestrator
from ..services.telemetry_service import TelemetryOrchestrator

router = APIRouter(prefix="/api/backends", tags=["backends"])


@router.get("/{name}/connectivity", response_model=ConnectivityGraph)
async def backend_connectivity(
    name: str,
    demo: bool = Query(False),
    orchestrator: TelemetryOrchestrator = Depends(get_orchestrator),
) -> ConnectivityGraph:
    """Qubit connectivity graph; synthetic, so only served in demo mode."""
    return await orchestrator.connectivity(name, demo=demo)
