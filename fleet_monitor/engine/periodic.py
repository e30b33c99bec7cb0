"""Weekly and monthly status trend series over the full job history.

Unlike the live KPIs these series ignore the trailing window: they are
historical views computed from every job in the snapshot.
"""
from __future__ import annotations

from datetime import datetime, time, timedelta
from typing import List, Sequence, Tuple
from zoneinfo import ZoneInfo

import pandas as pd

from ..config import MONTHLY_TREND_POINTS, WEEKLY_TREND_POINTS
from .frame import between, count_statuses, jobs_frame
from .models import PeriodicPoint, PeriodicReport
from .records import Job

Period = Tuple[datetime, datetime]


def week_periods(now: datetime, tz: str = "UTC", points: int = WEEKLY_TREND_POINTS) -> List[Period]:
    """``points`` ISO weeks (Monday 00:00 to next Monday 00:00), oldest first, ending with the current week."""
    zone = ZoneInfo(tz)
    local = now.astimezone(zone)
    monday = local.date() - timedelta(days=local.weekday())
    periods = []
    for back in range(points - 1, -1, -1):
        start_day = monday - timedelta(weeks=back)
        periods.append((
            datetime.combine(start_day, time.min, tzinfo=zone),
            datetime.combine(start_day + timedelta(weeks=1), time.min, tzinfo=zone),
        ))
    return periods


def month_periods(now: datetime, tz: str = "UTC", points: int = MONTHLY_TREND_POINTS) -> List[Period]:
    """``points`` calendar months, oldest first, ending with the current month."""
    zone = ZoneInfo(tz)
    local = now.astimezone(zone)
    current = local.year * 12 + (local.month - 1)
    periods = []
    for index in range(current - points + 1, current + 1):
        year, month = divmod(index, 12)
        next_year, next_month = divmod(index + 1, 12)
        periods.append((
            datetime(year, month + 1, 1, tzinfo=zone),
            datetime(next_year, next_month + 1, 1, tzinfo=zone),
        ))
    return periods


def _week_label(start: datetime) -> str:
    return f"{start:%b} {start.day}"


def _month_label(start: datetime) -> str:
    return f"{start:%b}"


def _trend(frame: pd.DataFrame, periods: List[Period], label_fmt) -> List[PeriodicPoint]:
    return [
        PeriodicPoint(date=label_fmt(start), **count_statuses(between(frame, start, end)))
        for start, end in periods
    ]


def weekly_trend(jobs: Sequence[Job], now: datetime, tz: str = "UTC") -> List[PeriodicPoint]:
    """Status counts for the last 4 ISO weeks, labelled ``"Mon D"`` of the week start."""
    return _trend(jobs_frame(jobs), week_periods(now, tz), _week_label)


def monthly_trend(jobs: Sequence[Job], now: datetime, tz: str = "UTC") -> List[PeriodicPoint]:
    """Status counts for the last 6 calendar months, labelled with the short month name."""
    return _trend(jobs_frame(jobs), month_periods(now, tz), _month_label)


def periodic_trends(jobs: Sequence[Job], now: datetime, tz: str = "UTC") -> PeriodicReport:
    return PeriodicReport(
        weekly=weekly_trend(jobs, now, tz),
        monthly=monthly_trend(jobs, now, tz),
    )
