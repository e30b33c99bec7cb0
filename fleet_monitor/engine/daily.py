"""Today's completed jobs, grouped by backend."""
from __future__ import annotations

from datetime import datetime, time, timedelta
from typing import Sequence
from zoneinfo import ZoneInfo

from ..config import CHART_PALETTE
from .frame import between, jobs_frame
from .models import BackendCompletion, DailySummary
from .records import Job, JobStatus


def daily_summary(jobs: Sequence[Job], today: datetime, tz: str = "UTC") -> DailySummary:
    """Count COMPLETED jobs submitted on ``today``'s calendar day in *tz*, per backend.

    Backends are listed in order of first occurrence in *jobs*; entry ``i``
    gets ``CHART_PALETTE[i % len(CHART_PALETTE)]`` as its fill.
    """
    zone = ZoneInfo(tz)
    day = today.astimezone(zone).date()
    day_start = datetime.combine(day, time.min, tzinfo=zone)
    day_end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=zone)

    frame = between(jobs_frame(jobs), day_start, day_end)
    completed = frame.loc[frame["status"] == JobStatus.COMPLETED.value]
    per_backend = completed.groupby("backend", sort=False).size()

    entries = [
        BackendCompletion(
            name=str(name),
            value=int(count),
            fill=CHART_PALETTE[i % len(CHART_PALETTE)],
        )
        for i, (name, count) in enumerate(per_backend.items())
    ]
    return DailySummary(
        date=day_start.isoformat(),
        total_completed=len(completed),
        completed_by_backend=entries,
    )
