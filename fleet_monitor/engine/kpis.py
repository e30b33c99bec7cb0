"""Live KPI card values over the trailing window."""
from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from .models import Metrics
from .records import Job, JobStatus
from .wait_time import avg_wait


def success_rate(jobs: Sequence[Job]) -> float:
    """COMPLETED / (COMPLETED + ERROR) as a percentage; ``0.0`` with no finished jobs."""
    completed = sum(1 for j in jobs if j.status == JobStatus.COMPLETED)
    failed = sum(1 for j in jobs if j.status == JobStatus.ERROR)
    if completed + failed == 0:
        return 0.0
    return completed / (completed + failed) * 100.0


def compute_metrics(
    window_jobs: Sequence[Job],
    now: datetime,
    open_sessions: int = 0,
    api_speed_ms: Optional[float] = None,
) -> Metrics:
    """Build the KPI block from jobs already restricted to the trailing window."""
    live = sum(1 for j in window_jobs if j.status in (JobStatus.RUNNING, JobStatus.QUEUED))
    return Metrics(
        total_jobs=len(window_jobs),
        live_jobs=live,
        avg_wait_time=avg_wait(window_jobs, now),
        success_rate=success_rate(window_jobs),
        open_sessions=open_sessions,
        api_speed=api_speed_ms,
    )
