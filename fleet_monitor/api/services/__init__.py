"""Service layer — data sources and the report orchestrator."""
from .fleet_client import FetchError, FleetApiClient
from .telemetry_service import TelemetryOrchestrator

__all__ = ["FetchError", "FleetApiClient", "TelemetryOrchestrator"]
