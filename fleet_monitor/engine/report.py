"""Assemble a full telemetry report from one fleet snapshot.

Every data source (live API, synthetic generator) funnels through
``build_report`` so both are summarised identically.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional

from ..config import JOB_PAGE_LIMIT, WINDOW_HOURS
from .daily import daily_summary
from .histogram import bucketize
from .kpis import compute_metrics
from .models import TelemetryReport
from .periodic import periodic_trends
from .records import Backend, Job
from .windows import select_window

logger = logging.getLogger(__name__)


@dataclass
class FleetSnapshot:
    """Complete job + backend collection obtained in one cycle."""

    backends: List[Backend] = field(default_factory=list)
    jobs: List[Job] = field(default_factory=list)
    open_sessions: int = 0
    api_speed_ms: Optional[float] = None


def build_report(
    snapshot: FleetSnapshot,
    now: datetime,
    tz: str = "UTC",
    window: timedelta = timedelta(hours=WINDOW_HOURS),
    job_limit: int = JOB_PAGE_LIMIT,
) -> TelemetryReport:
    """Recompute every aggregate from *snapshot* as of *now*.

    KPIs and the hourly chart use the trailing *window*; the daily summary and
    the periodic trends use the full job set.  ``jobs`` in the result is the
    *job_limit* most recently submitted windowed jobs, newest first; all
    aggregates are computed before that truncation.
    """
    recent = select_window(snapshot.jobs, now, window)
    newest_first = sorted(recent, key=lambda j: j.submitted, reverse=True)

    report = TelemetryReport(
        jobs=newest_first[:job_limit],
        backends=list(snapshot.backends),
        metrics=compute_metrics(recent, now, snapshot.open_sessions, snapshot.api_speed_ms),
        chart_data=bucketize(recent, now, tz=tz),
        daily_summary=daily_summary(snapshot.jobs, now, tz=tz),
        periodic_report_data=periodic_trends(snapshot.jobs, now, tz=tz),
    )
    logger.debug(
        "Built report: %d jobs (%d in window), %d backends",
        len(snapshot.jobs), len(recent), len(snapshot.backends),
    )
    return report
