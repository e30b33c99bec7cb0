"""Metrics aggregation engine — pure functions over an in-memory fleet snapshot."""
from .records import Backend, BackendStatus, Job, JobStatus, StatusEntry, ValidationError
from .models import TelemetryReport
from .report import FleetSnapshot, build_report

__all__ = [
    "Backend",
    "BackendStatus",
    "FleetSnapshot",
    "Job",
    "JobStatus",
    "StatusEntry",
    "TelemetryReport",
    "ValidationError",
    "build_report",
]
