"""Singleton dependency providers for FastAPI ``Depends()``."""
from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import Depends

from ..config import ApiSettings

logger = logging.getLogger(__name__)


@lru_cache
def get_settings() -> ApiSettings:
    return ApiSettings()


# Lazy singletons, built on first request from the app's settings
# (``create_app`` overrides ``get_settings`` for its own instance).

_cache = None
_orchestrator = None


def get_cache():
    """Return the singleton ``SnapshotCache``."""
    global _cache
    if _cache is None:
        from ..cache.manager import SnapshotCache

        _cache = SnapshotCache()
    return _cache


def get_orchestrator(settings: ApiSettings = Depends(get_settings)):
    """Return the singleton ``TelemetryOrchestrator``."""
    global _orchestrator
    if _orchestrator is None:
        from ...engine.synthetic import SyntheticFleetGenerator
        from ..services.fleet_client import FleetApiClient
        from ..services.telemetry_service import TelemetryOrchestrator

        _orchestrator = TelemetryOrchestrator(
            client=FleetApiClient(settings.backend_api_url, timeout_seconds=settings.fetch_timeout_seconds),
            generator=SyntheticFleetGenerator(
                seed=settings.synthetic_seed,
                job_count=settings.synthetic_job_count,
            ),
            cache=get_cache(),
            tz=settings.report_timezone,
            strict_validation=settings.strict_validation,
        )
    return _orchestrator


def shutdown_providers() -> None:
    """Close the live client and drop every singleton."""
    global _cache, _orchestrator
    if _orchestrator is not None:
        _orchestrator.close()
    _orchestrator = None
    _cache = None
    logger.debug("Dependency singletons released")
