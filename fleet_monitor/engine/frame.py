"""Columnar view of a job set used by the time-bucketing aggregators."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Sequence

import pandas as pd

from ..config import CHART_STATUSES
from .records import Job


def jobs_frame(jobs: Sequence[Job]) -> pd.DataFrame:
    """One row per job: ``submitted`` (UTC), ``status``, ``backend``."""
    return pd.DataFrame({
        "submitted": pd.to_datetime([j.submitted for j in jobs], utc=True),
        "status": pd.Series([j.status.value for j in jobs], dtype=object),
        "backend": pd.Series([j.backend for j in jobs], dtype=object),
    })


def between(frame: pd.DataFrame, start: datetime, end: datetime) -> pd.DataFrame:
    """Rows with ``start <= submitted < end``."""
    lo = pd.Timestamp(start.astimezone(timezone.utc))
    hi = pd.Timestamp(end.astimezone(timezone.utc))
    submitted = frame["submitted"]
    return frame.loc[(submitted >= lo) & (submitted < hi)]


def count_statuses(frame: pd.DataFrame) -> Dict[str, int]:
    """Count rows per chart status; statuses outside the chart set are ignored."""
    counts = frame["status"].value_counts()
    return {status.lower(): int(counts.get(status, 0)) for status in CHART_STATUSES}
