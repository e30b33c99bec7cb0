"""Hourly status histogram for the trailing-window trend chart."""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import List, Sequence
from zoneinfo import ZoneInfo

import pandas as pd

from ..config import CHART_BUCKET_COUNT, CHART_BUCKET_MINUTES, CHART_STATUSES
from .frame import between, jobs_frame
from .models import ChartBucket
from .records import Job

logger = logging.getLogger(__name__)


def bucketize(
    jobs: Sequence[Job],
    now: datetime,
    bucket_count: int = CHART_BUCKET_COUNT,
    bucket_width: timedelta = timedelta(minutes=CHART_BUCKET_MINUTES),
    tz: str = "UTC",
) -> List[ChartBucket]:
    """Partition ``[now - bucket_count * bucket_width, now)`` into contiguous buckets.

    Buckets are half-open ``[start, start + width)`` and returned oldest first.
    A job lands in the single bucket containing its ``submitted`` time; jobs
    outside the covered range are dropped rather than clamped to an edge bucket.

    Parameters
    ----------
    jobs : sequence of Job
        Usually the trailing-window job set.
    now : datetime
        Exclusive upper edge of the newest bucket.
    bucket_count, bucket_width
        Histogram geometry; defaults give 12 hourly buckets.
    tz : str
        IANA zone used for the ``HH:MM`` bucket labels.

    Returns
    -------
    list of ChartBucket
        Always ``bucket_count`` entries, zero-filled when empty.
    """
    if bucket_count <= 0 or bucket_width <= timedelta(0):
        raise ValueError("bucket_count and bucket_width must be positive")

    zone = ZoneInfo(tz)
    start = now - bucket_count * bucket_width
    in_range = between(jobs_frame(jobs), start, now)

    offsets = (in_range["submitted"] - pd.Timestamp(start)) // pd.Timedelta(bucket_width)
    counts = in_range.assign(bucket=offsets).groupby(["bucket", "status"]).size()
    lookup = {(int(b), str(s)): int(n) for (b, s), n in counts.items()}

    buckets: List[ChartBucket] = []
    for i in range(bucket_count):
        bucket_start = start + i * bucket_width
        buckets.append(ChartBucket(
            time=bucket_start.astimezone(zone).strftime("%H:%M"),
            **{status.lower(): lookup.get((i, status), 0) for status in CHART_STATUSES},
        ))
    logger.debug("Bucketed %d of %d jobs into %d buckets", len(in_range), len(jobs), bucket_count)
    return buckets
