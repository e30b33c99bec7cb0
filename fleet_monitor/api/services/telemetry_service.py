"""
Data-source orchestrator — live fetch or synthetic generation, then aggregation.

Live mode fetches backends and jobs concurrently and fails fast: if either
request fails the other is cancelled and the whole attempt counts as failed.
A failed live attempt is never surfaced to the caller; a freshly generated
synthetic report is returned instead, with an advisory ``note``.

Synthetic mode serves from a single-slot TTL cache unless forced.  Refreshes
from the same caller context (``session`` + mode) are coalesced: a request
that arrives while one is in flight awaits the running refresh instead of
starting a second fetch.
"""
from __future__ import annotations

import asyncio
import logging
import time
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from ...config import LIVE_OPEN_SESSIONS
from ...engine.models import ConnectivityGraph, TelemetryReport
from ...engine.normalize import normalize_backend, normalize_batch, normalize_job
from ...engine.records import ValidationError
from ...engine.report import FleetSnapshot, build_report
from ...engine.synthetic import SyntheticFleetGenerator
from ..cache.manager import SnapshotCache
from ..schemas.telemetry import MetricsResponse
from .fleet_client import FetchError, FleetApiClient

logger = logging.getLogger(__name__)

SOURCE_REAL = "real"
SOURCE_MOCK = "mock"
SOURCE_MOCK_CACHED = "mock (cached)"
FALLBACK_NOTE = "Real API failed, fallback to mock data."


class ConnectivityUnavailableError(Exception):
    """Connectivity graphs are only served in demo mode."""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


async def _join_fail_fast(*tasks: "asyncio.Task[Any]") -> List[Any]:
    """Await *tasks* together; on the first failure cancel the rest and re-raise it."""
    done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
    for task in pending:
        task.cancel()
    # Retrieve every exception so none is reported as unhandled.
    errors = [t.exception() for t in done if not t.cancelled() and t.exception() is not None]
    if errors:
        raise errors[0]
    return [t.result() for t in tasks]


class TelemetryOrchestrator:
    """Chooses the data source for each refresh and runs the shared aggregation pipeline."""

    def __init__(
        self,
        client: FleetApiClient,
        generator: SyntheticFleetGenerator,
        cache: SnapshotCache,
        tz: str = "UTC",
        strict_validation: bool = False,
        now_fn: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.client = client
        self.generator = generator
        self.cache = cache
        self.tz = tz
        self.strict_validation = strict_validation
        self._now = now_fn
        self._inflight: Dict[Tuple[str, bool], "asyncio.Task[MetricsResponse]"] = {}

    # ── Public ───────────────────────────────────────────────────────

    async def get_report(self, demo: bool, force: bool = False, session: str = "default") -> MetricsResponse:
        """Return the telemetry report for one refresh.

        Parameters
        ----------
        demo : bool
            Serve synthetic data instead of querying the live API.
        force : bool
            Start a new refresh even if one is in flight for this session, and
            bypass the synthetic cache.
        session : str
            Caller context used to coalesce overlapping refreshes.

        Raises
        ------
        ValidationError
            Only with ``strict_validation`` and a malformed live record.
        """
        key = (session, demo)
        task = self._inflight.get(key)
        if task is None or force:
            task = asyncio.create_task(self._refresh(demo, force))
            self._inflight[key] = task
            task.add_done_callback(lambda t, key=key: self._discard(key, t))
        else:
            logger.debug("Coalescing refresh for session=%s demo=%s", session, demo)
        return await asyncio.shield(task)

    async def connectivity(self, backend_name: str, demo: bool) -> ConnectivityGraph:
        """Synthetic qubit connectivity graph for *backend_name* (demo mode only)."""
        if not demo:
            raise ConnectivityUnavailableError(
                f"Connectivity for {backend_name!r} is only available in demo mode"
            )
        return await asyncio.to_thread(self.generator.connectivity, backend_name)

    @property
    def inflight_count(self) -> int:
        return len(self._inflight)

    def close(self) -> None:
        self.client.close()

    # ── Refresh paths ────────────────────────────────────────────────

    def _discard(self, key: Tuple[str, bool], task: "asyncio.Task[MetricsResponse]") -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]

    async def _refresh(self, demo: bool, force: bool) -> MetricsResponse:
        if demo:
            return await self._synthetic(force=force)
        try:
            return await self._live()
        except FetchError as exc:
            logger.warning("Live fetch failed, falling back to synthetic data: %s", exc)
        except ValidationError as exc:
            if self.strict_validation:
                logger.error("Rejected live batch: %s", exc)
                raise
            logger.warning("Live snapshot unusable, falling back to synthetic data: %s", exc)
        response = await self._synthetic(force=True)
        return response.model_copy(update={"note": FALLBACK_NOTE})

    async def _live(self) -> MetricsResponse:
        logger.info("Fetching live fleet data from %s", self.client.base_url)
        t0 = time.monotonic()
        backends_task = asyncio.create_task(asyncio.to_thread(self.client.fetch_backends))
        jobs_task = asyncio.create_task(asyncio.to_thread(self.client.fetch_jobs))
        raw_backends, raw_jobs = await _join_fail_fast(backends_task, jobs_task)
        api_speed_ms = (time.monotonic() - t0) * 1000
        report = await asyncio.to_thread(self._live_report, raw_backends, raw_jobs, api_speed_ms)
        return MetricsResponse.from_report(report, source=SOURCE_REAL)

    def _live_report(self, raw_backends: list, raw_jobs: list, api_speed_ms: float) -> TelemetryReport:
        backends = normalize_batch(raw_backends, normalize_backend, strict=self.strict_validation, source="live")
        jobs = normalize_batch(raw_jobs, normalize_job, strict=self.strict_validation, source="live")
        snapshot = FleetSnapshot(
            backends=backends,
            jobs=jobs,
            open_sessions=LIVE_OPEN_SESSIONS,
            api_speed_ms=api_speed_ms,
        )
        return build_report(snapshot, self._now(), tz=self.tz)

    async def _synthetic(self, force: bool = False) -> MetricsResponse:
        if not force:
            cached: Optional[TelemetryReport] = self.cache.get()
            if cached is not None:
                logger.debug("Serving cached synthetic report (age %.1fs)", self.cache.age() or 0.0)
                return MetricsResponse.from_report(cached, source=SOURCE_MOCK_CACHED)
        report = await asyncio.to_thread(self._synthetic_report)
        self.cache.set(report)
        return MetricsResponse.from_report(report, source=SOURCE_MOCK)

    def _synthetic_report(self) -> TelemetryReport:
        now = self._now()
        return build_report(self.generator.generate(now), now, tz=self.tz)
