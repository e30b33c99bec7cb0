"""Canonical job and backend records."""
from __future__ import annotations

import enum
from datetime import datetime, timezone
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ValidationError(ValueError):
    """A source record is malformed (missing mandatory field, unknown enum, bad type)."""

    def __init__(self, message: str, record_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.record_id = record_id


class JobStatus(str, enum.Enum):
    COMPLETED = "COMPLETED"
    RUNNING = "RUNNING"
    QUEUED = "QUEUED"
    ERROR = "ERROR"
    CANCELLED = "CANCELLED"
    UNKNOWN = "UNKNOWN"


TERMINAL_STATUSES = frozenset({JobStatus.COMPLETED, JobStatus.ERROR, JobStatus.CANCELLED})

# Aggregation buckets submission times as nanosecond pandas timestamps.
SUBMITTED_MIN = datetime(1678, 1, 1, tzinfo=timezone.utc)
SUBMITTED_MAX = datetime(2262, 1, 1, tzinfo=timezone.utc)


class BackendStatus(str, enum.Enum):
    active = "active"
    inactive = "inactive"
    maintenance = "maintenance"


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive timestamps; normalise aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class CamelModel(BaseModel):
    """Serialises to camelCase, accepts either camelCase or snake_case on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StatusEntry(CamelModel):
    status: JobStatus
    timestamp: datetime

    @field_validator("status", mode="before")
    @classmethod
    def _upper_status(cls, v):
        return v.strip().upper() if isinstance(v, str) else v

    @field_validator("timestamp")
    @classmethod
    def _utc_timestamp(cls, v: datetime) -> datetime:
        return as_utc(v)


class Job(CamelModel):
    """A unit of work submitted to a backend.

    ``status`` is the current state only; ``status_history`` is passed through
    from the source untouched and may disagree with it (UNKNOWN jobs in
    particular may carry an incomplete history).
    """

    id: str
    status: JobStatus
    backend: str = ""
    submitted: datetime
    elapsed_time: float = Field(default=0.0, ge=0)
    user: str = ""
    qpu_seconds: float = Field(default=0.0, ge=0)
    logs: str = ""
    results: Dict[str, int] = Field(default_factory=dict)
    status_history: List[StatusEntry] = Field(default_factory=list)

    @field_validator("status", mode="before")
    @classmethod
    def _upper_status(cls, v):
        return v.strip().upper() if isinstance(v, str) else v

    @field_validator("submitted")
    @classmethod
    def _utc_submitted(cls, v: datetime) -> datetime:
        v = as_utc(v)
        if not SUBMITTED_MIN <= v < SUBMITTED_MAX:
            raise ValueError(f"submitted {v.isoformat()} is outside {SUBMITTED_MIN.year}-{SUBMITTED_MAX.year - 1}")
        return v

    def first_entry(self, status: JobStatus) -> Optional[StatusEntry]:
        """Return the first history entry with *status*, or ``None``."""
        for entry in self.status_history:
            if entry.status == status:
                return entry
        return None


class Backend(CamelModel):
    """A compute resource; read-only snapshot per fetch cycle."""

    name: str
    status: BackendStatus
    qubit_count: int = Field(default=0, ge=0)
    queue_depth: int = Field(default=0, ge=0)
    error_rate: float = Field(default=0.0, ge=0.0, le=1.0)

    @field_validator("status", mode="before")
    @classmethod
    def _lower_status(cls, v):
        return v.strip().lower() if isinstance(v, str) else v
