"""Average queueing latency from job status histories.

The wait of a job is measured from its QUEUED entry to its RUNNING entry, or
to ``now`` when it has not started yet.  Jobs that already finished still
contribute their QUEUED -> RUNNING interval: this is queueing latency, not
end-to-end latency.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from .records import Job, JobStatus


def queue_wait(job: Job, now: datetime) -> Optional[float]:
    """Wait in seconds for one job, ``None`` if it has no QUEUED entry.

    Negative intervals (malformed histories) are clamped to zero.
    """
    queued = job.first_entry(JobStatus.QUEUED)
    if queued is None:
        return None
    running = job.first_entry(JobStatus.RUNNING)
    end = running.timestamp if running is not None else now
    return max(0.0, (end - queued.timestamp).total_seconds())


def avg_wait(jobs: Sequence[Job], now: datetime) -> float:
    """Mean queue wait in seconds over jobs with a QUEUED entry; ``0.0`` if none."""
    waits = [w for w in (queue_wait(job, now) for job in jobs) if w is not None]
    if not waits:
        return 0.0
    return sum(waits) / len(waits)
