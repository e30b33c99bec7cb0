"""
Synthetic fleet generator.

Produces backend and job payloads in the same wire form as the live fleet
API, then runs them through the shared normalizer, so the aggregation engine
sees no difference between the two sources.  Every random draw comes from a
single ``numpy.random.Generator``; pass ``seed`` for reproducible datasets.

Generated jobs obey the record invariants: the history starts with QUEUED at
``submitted``, timestamps are non-decreasing, no entry lies after ``now``, and
the last entry matches the job's status.  ``elapsed_time`` is the drawn run time
(at most ``SYNTHETIC_MAX_RUN_MINUTES``), for RUNNING jobs too.
"""
from __future__ import annotations

import logging
import math
import threading
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

import numpy as np

from ..config import (
    CONNECTIVITY_ANCILLARY_PROB,
    CONNECTIVITY_EDGE_FACTOR,
    CONNECTIVITY_WEIGHT_RANGE,
    DEFAULT_QUBIT_COUNT,
    QUBIT_COUNT_TABLE,
    SYNTHETIC_API_SPEED_MS,
    SYNTHETIC_BACKEND_OUTAGES,
    SYNTHETIC_BACKENDS,
    SYNTHETIC_CANCEL_BEFORE_RUN_PROB,
    SYNTHETIC_HISTORY_DAYS,
    SYNTHETIC_JOB_COUNT,
    SYNTHETIC_MAX_QPU_SECONDS,
    SYNTHETIC_MAX_QUEUE_MINUTES,
    SYNTHETIC_MAX_RUN_MINUTES,
    SYNTHETIC_MAX_SHOTS_PER_OUTCOME,
    SYNTHETIC_OPEN_SESSIONS,
    SYNTHETIC_RESULT_OUTCOMES,
    SYNTHETIC_USERS,
)
from .models import ConnectivityGraph, QubitLink, QubitNode
from .normalize import normalize_backend, normalize_batch, normalize_job
from .records import TERMINAL_STATUSES, JobStatus
from .report import FleetSnapshot

logger = logging.getLogger(__name__)

_GENERATED_STATUSES = [
    JobStatus.COMPLETED,
    JobStatus.RUNNING,
    JobStatus.QUEUED,
    JobStatus.ERROR,
    JobStatus.CANCELLED,
]
_ID_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


class SyntheticFleetGenerator:
    """Seedable source of plausible fleet snapshots and connectivity graphs."""

    def __init__(
        self,
        seed: Optional[int] = None,
        job_count: int = SYNTHETIC_JOB_COUNT,
        history_days: int = SYNTHETIC_HISTORY_DAYS,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self.job_count = int(job_count)
        self.history_days = int(history_days)
        self._rng = rng if rng is not None else np.random.default_rng(seed)
        # numpy Generators are not thread-safe; generation runs in worker threads.
        self._lock = threading.Lock()

    # ── Fleet ─────────────────────────────────────────────────────────

    def backend_payloads(self) -> List[Dict[str, Any]]:
        rng = self._rng
        payloads = []
        for name, (qubits, error_rate, max_depth) in SYNTHETIC_BACKENDS.items():
            status = "active"
            outage = SYNTHETIC_BACKEND_OUTAGES.get(name)
            if outage is not None and rng.random() < outage[1]:
                status = outage[0]
            payloads.append({
                "name": name,
                "status": status,
                "qubit_count": qubits,
                "queue_depth": int(rng.integers(0, max_depth)) if max_depth > 0 else 0,
                "error_rate": error_rate,
            })
        return payloads

    def _job_id(self, index: int) -> str:
        token = "".join(_ID_ALPHABET[k] for k in self._rng.integers(0, len(_ID_ALPHABET), 9))
        return f"c{token}q{index}"

    def _job_payload(self, index: int, backend: str, now: datetime) -> Dict[str, Any]:
        rng = self._rng
        status = _GENERATED_STATUSES[int(rng.integers(len(_GENERATED_STATUSES)))]
        submitted = now - timedelta(seconds=float(rng.uniform(0, self.history_days * 86400)))
        queue_s = float(rng.integers(0, SYNTHETIC_MAX_QUEUE_MINUTES)) * 60.0
        run_s = float(rng.integers(0, SYNTHETIC_MAX_RUN_MINUTES)) * 60.0

        # Squeeze the timeline so nothing is stamped after ``now``.
        available = max(0.0, (now - submitted).total_seconds())
        if queue_s + run_s > available:
            scale = available / (queue_s + run_s)
            queue_s *= scale
            run_s *= scale
        started = min(submitted + timedelta(seconds=queue_s), now)
        finished = min(started + timedelta(seconds=run_s), now)

        history = [{"status": JobStatus.QUEUED.value, "timestamp": submitted.isoformat()}]
        elapsed = 0.0
        if status == JobStatus.CANCELLED and rng.random() < SYNTHETIC_CANCEL_BEFORE_RUN_PROB:
            history.append({"status": status.value, "timestamp": started.isoformat()})
        elif status != JobStatus.QUEUED:
            history.append({"status": JobStatus.RUNNING.value, "timestamp": started.isoformat()})
            elapsed = run_s
            if status in TERMINAL_STATUSES:
                history.append({"status": status.value, "timestamp": finished.isoformat()})

        completed = status == JobStatus.COMPLETED
        if completed:
            results = {
                label: int(rng.integers(0, SYNTHETIC_MAX_SHOTS_PER_OUTCOME))
                for label in SYNTHETIC_RESULT_OUTCOMES
            }
            logs = "Job executed successfully."
        else:
            results = {}
            logs = "Error: Qubit calibration failed." if status == JobStatus.ERROR else ""

        return {
            "id": self._job_id(index),
            "status": status.value,
            "backend": backend,
            "submitted": submitted.isoformat(),
            "elapsed_time": elapsed,
            "user": SYNTHETIC_USERS[index % len(SYNTHETIC_USERS)],
            "qpu_seconds": float(rng.uniform(0, SYNTHETIC_MAX_QPU_SECONDS)) if completed else 0.0,
            "logs": logs,
            "results": results,
            "status_history": history,
        }

    def job_payloads(self, now: datetime, backend_names: List[str]) -> List[Dict[str, Any]]:
        names = backend_names or list(SYNTHETIC_BACKENDS)
        return [
            self._job_payload(i, names[int(self._rng.integers(len(names)))], now)
            for i in range(self.job_count)
        ]

    def generate(self, now: datetime) -> FleetSnapshot:
        """Draw a complete fleet snapshot as of *now*."""
        with self._lock:
            return self._generate(now)

    def _generate(self, now: datetime) -> FleetSnapshot:
        backends = normalize_batch(self.backend_payloads(), normalize_backend, strict=True, source="synthetic")
        jobs = normalize_batch(
            self.job_payloads(now, [b.name for b in backends]),
            normalize_job,
            strict=True,
            source="synthetic",
        )
        lo_sessions, hi_sessions = SYNTHETIC_OPEN_SESSIONS
        lo_speed, hi_speed = SYNTHETIC_API_SPEED_MS
        logger.info("Generated synthetic fleet: %d backends, %d jobs", len(backends), len(jobs))
        return FleetSnapshot(
            backends=backends,
            jobs=jobs,
            open_sessions=int(self._rng.integers(lo_sessions, hi_sessions + 1)),
            api_speed_ms=float(self._rng.integers(lo_speed, hi_speed + 1)),
        )

    # ── Connectivity ──────────────────────────────────────────────────

    def connectivity(self, backend_name: str) -> ConnectivityGraph:
        """Random qubit coupling graph sized from ``QUBIT_COUNT_TABLE``.

        ``ceil(1.5 * n)`` edges are drawn; self-loops and duplicates (in
        either direction) are skipped, so the result has at most that many.
        """
        with self._lock:
            return self._connectivity(backend_name)

    def _connectivity(self, backend_name: str) -> ConnectivityGraph:
        rng = self._rng
        n = QUBIT_COUNT_TABLE.get(backend_name, DEFAULT_QUBIT_COUNT)
        nodes = [
            QubitNode(id=i, group="ancillary" if rng.random() < CONNECTIVITY_ANCILLARY_PROB else "core")
            for i in range(n)
        ]
        lo, hi = CONNECTIVITY_WEIGHT_RANGE
        seen = set()
        links: List[QubitLink] = []
        for _ in range(math.ceil(n * CONNECTIVITY_EDGE_FACTOR)):
            source = int(rng.integers(n))
            target = int(rng.integers(n))
            if source == target:
                continue
            key = (min(source, target), max(source, target))
            if key in seen:
                continue
            seen.add(key)
            links.append(QubitLink(source=source, target=target, value=float(rng.uniform(lo, hi))))
        return ConnectivityGraph(nodes=nodes, links=links)
