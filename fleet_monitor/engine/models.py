"""Derived report shapes produced by the aggregation engine."""
from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from .records import Backend, CamelModel, Job


class StatusCounts(CamelModel):
    """Per-status job counts for one chart point."""

    completed: int = Field(default=0, alias="COMPLETED")
    running: int = Field(default=0, alias="RUNNING")
    queued: int = Field(default=0, alias="QUEUED")
    error: int = Field(default=0, alias="ERROR")

    @property
    def total(self) -> int:
        return self.completed + self.running + self.queued + self.error


class ChartBucket(StatusCounts):
    """One histogram bucket, labelled with its start time (HH:MM)."""

    time: str


class PeriodicPoint(StatusCounts):
    """One weekly or monthly trend point."""

    date: str


class PeriodicReport(CamelModel):
    weekly: List[PeriodicPoint] = Field(default_factory=list)
    monthly: List[PeriodicPoint] = Field(default_factory=list)


class BackendCompletion(CamelModel):
    name: str
    value: int
    fill: str


class DailySummary(CamelModel):
    date: str
    total_completed: int = 0
    completed_by_backend: List[BackendCompletion] = Field(default_factory=list)


class Metrics(CamelModel):
    total_jobs: int = 0
    live_jobs: int = 0
    avg_wait_time: float = 0.0
    success_rate: float = 0.0
    open_sessions: int = 0
    api_speed: Optional[float] = None


class TelemetryReport(CamelModel):
    """Everything the dashboard renders for one refresh cycle."""

    jobs: List[Job] = Field(default_factory=list)
    backends: List[Backend] = Field(default_factory=list)
    metrics: Metrics = Field(default_factory=Metrics)
    chart_data: List[ChartBucket] = Field(default_factory=list)
    daily_summary: DailySummary
    periodic_report_data: PeriodicReport = Field(default_factory=PeriodicReport)


class QubitNode(CamelModel):
    id: int
    group: str


class QubitLink(CamelModel):
    source: int
    target: int
    value: float


class ConnectivityGraph(CamelModel):
    """Qubit coupling graph for one backend (undirected, no self-loops)."""

    nodes: List[QubitNode] = Field(default_factory=list)
    links: List[QubitLink] = Field(default_factory=list)
