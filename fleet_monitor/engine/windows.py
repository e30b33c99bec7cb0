"""Trailing-window selection for the live KPI surface."""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import List, Sequence

from .records import Job


def select_window(jobs: Sequence[Job], now: datetime, horizon: timedelta) -> List[Job]:
    """Return the jobs submitted strictly after ``now - horizon``, order preserved."""
    cutoff = now - horizon
    return [job for job in jobs if job.submitted > cutoff]
