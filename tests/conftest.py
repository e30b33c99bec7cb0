"""Shared test fixtures for the fleet_monitor test suite."""
from __future__ import annotations

import copy
import itertools
from datetime import datetime, timedelta, timezone

import pytest

from fleet_monitor.engine.records import Job, JobStatus, StatusEntry


# ── Data fixtures ────────────────────────────────────────────────────


@pytest.fixture
def now():
    """Fixed reference instant: Wednesday 2024-05-15 12:00 UTC."""
    return datetime(2024, 5, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_job(now):
    """Factory for canonical ``Job`` records submitted relative to ``now``.

    ``history`` is a list of ``(status, minutes_after_submit)`` pairs; when
    omitted a plausible history is derived from ``status``.
    """
    counter = itertools.count()

    def _make(
        status="COMPLETED",
        minutes_ago=30.0,
        backend="ibm_brisbane",
        history=None,
        submitted=None,
        job_id=None,
    ):
        status = JobStatus(status)
        if submitted is None:
            submitted = now - timedelta(minutes=minutes_ago)
        if history is None:
            history = [("QUEUED", 0)]
            if status not in (JobStatus.QUEUED, JobStatus.UNKNOWN):
                history.append(("RUNNING", 2))
            if status in (JobStatus.COMPLETED, JobStatus.ERROR, JobStatus.CANCELLED):
                history.append((status.value, 5))
        return Job(
            id=job_id or f"job-{next(counter)}",
            status=status,
            backend=backend,
            submitted=submitted,
            status_history=[
                StatusEntry(status=s, timestamp=submitted + timedelta(minutes=m)) for s, m in history
            ],
        )

    return _make


@pytest.fixture
def job_payload(now):
    """Factory for raw live-API job payloads (snake_case wire form)."""
    counter = itertools.count()

    def _payload(status="COMPLETED", minutes_ago=30.0, backend="ibm_brisbane", **overrides):
        submitted = now - timedelta(minutes=minutes_ago)
        payload = {
            "id": f"live-{next(counter)}",
            "status": status,
            "backend": backend,
            "submitted": submitted.isoformat(),
            "elapsed_time": 12.5,
            "user": "Alice",
            "qpu_seconds": 1.5,
            "logs": "",
            "results": {"001": 10},
            "status_history": [
                {"status": "QUEUED", "timestamp": submitted.isoformat()},
                {"status": "RUNNING", "timestamp": (submitted + timedelta(minutes=3)).isoformat()},
            ],
        }
        payload.update(overrides)
        return payload

    return _payload


@pytest.fixture
def backend_payloads():
    return [
        {"name": "ibm_brisbane", "status": "active", "qubit_count": 127, "queue_depth": 4, "error_rate": 0.012},
        {"name": "ibmq_kolkata", "status": "maintenance", "qubit_count": 27, "queue_depth": 0, "error_rate": 0.025},
    ]


class FakeFleetClient:
    """In-memory stand-in for ``FleetApiClient`` (no network, counts calls)."""

    base_url = "http://fleet.test/api"

    def __init__(self, backends=None, jobs=None, error=None):
        self.backends = backends or []
        self.jobs = jobs or []
        self.error = error
        self.backend_calls = 0
        self.job_calls = 0
        self.closed = False

    def fetch_backends(self):
        self.backend_calls += 1
        if self.error is not None:
            raise self.error
        return copy.deepcopy(self.backends)

    def fetch_jobs(self, limit=5000):
        self.job_calls += 1
        if self.error is not None:
            raise self.error
        return copy.deepcopy(self.jobs[:limit])

    def close(self):
        self.closed = True


@pytest.fixture
def fake_client():
    """Factory for ``FakeFleetClient`` instances."""
    return FakeFleetClient


@pytest.fixture
def make_orchestrator(now):
    """Build a ``TelemetryOrchestrator`` over a small seeded synthetic fleet."""
    from fleet_monitor.api.cache.manager import SnapshotCache
    from fleet_monitor.api.services.telemetry_service import TelemetryOrchestrator
    from fleet_monitor.engine.synthetic import SyntheticFleetGenerator

    def _make(client, strict_validation=False, cache=None, job_count=200):
        return TelemetryOrchestrator(
            client=client,
            generator=SyntheticFleetGenerator(seed=11, job_count=job_count),
            cache=cache if cache is not None else SnapshotCache(),
            strict_validation=strict_validation,
            now_fn=lambda: now,
        )

    return _make


# ── API fixtures ─────────────────────────────────────────────────────


@pytest.fixture
async def app(make_orchestrator, fake_client):
    """Create a test FastAPI app whose live API is unreachable."""
    import fleet_monitor.api.deps.providers as _prov
    from fleet_monitor.api.config import ApiSettings
    from fleet_monitor.api.main import create_app
    from fleet_monitor.api.services.fleet_client import FetchError

    settings = ApiSettings(synthetic_seed=11, synthetic_job_count=200)
    orchestrator = make_orchestrator(fake_client(error=FetchError("connection refused")))

    # Inject into the provider module
    _prov._cache = orchestrator.cache
    _prov._orchestrator = orchestrator

    application = create_app(settings)
    yield application

    # Cleanup
    _prov._cache = None
    _prov._orchestrator = None
    _prov.get_settings.cache_clear()


@pytest.fixture
async def client(app):
    """Async HTTP client bound to the test app."""
    from httpx import ASGITransport, AsyncClient

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://testserver",
    ) as ac:
        yield ac
