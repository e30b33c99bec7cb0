"""Map heterogeneous source payloads onto the canonical ``Job`` / ``Backend`` records.

Live-API payloads arrive in snake_case, synthetic ones may use either casing;
both go through the same functions so the aggregation engine never sees a
difference between data sources.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, List, Mapping, Optional, TypeVar

from pydantic import ValidationError as PydanticValidationError

from .records import Backend, Job, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Mandatory fields; alternatives are accepted in order.
_JOB_REQUIRED = {
    "id": ("id",),
    "status": ("status",),
    "submitted": ("submitted", "creation_date", "creationDate"),
}
_BACKEND_REQUIRED = {
    "name": ("name",),
    "status": ("status",),
}


def _pick(payload: Mapping[str, Any], *keys: str) -> Any:
    """Return the first non-``None`` value among *keys*."""
    for key in keys:
        value = payload.get(key)
        if value is not None:
            return value
    return None


def _require(payload: Any, required: Mapping[str, tuple], kind: str) -> dict:
    if not isinstance(payload, Mapping):
        raise ValidationError(f"{kind} payload must be a mapping, got {type(payload).__name__}")
    found = {}
    missing = []
    for field, keys in required.items():
        value = _pick(payload, *keys)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(field)
        else:
            found[field] = value
    if missing:
        record_id = payload.get("id") or payload.get("name")
        raise ValidationError(
            f"{kind} record missing mandatory field(s): {', '.join(missing)}",
            record_id=str(record_id) if record_id is not None else None,
        )
    return found


def _validate(model: Callable[[dict], T], record: dict, kind: str, record_id: str) -> T:
    try:
        return model(record)
    except PydanticValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise ValidationError(f"{kind} {record_id!r} is malformed: {problems}", record_id=record_id) from exc


def normalize_job(payload: Mapping[str, Any]) -> Job:
    """Build a canonical ``Job`` from a source payload.

    Status strings are upper-cased, absent numeric fields default to 0 and
    absent mappings to ``{}``.  The status history is passed through as-is.

    Raises
    ------
    ValidationError
        If ``id``, ``status`` or ``submitted`` is absent, or a field cannot be
        coerced (an unknown status is never mapped to a different one).
    """
    required = _require(payload, _JOB_REQUIRED, "Job")
    record = {
        "id": str(required["id"]),
        "status": required["status"],
        "submitted": required["submitted"],
        "backend": _pick(payload, "backend") or "",
        "elapsed_time": _pick(payload, "elapsed_time", "elapsedTime") or 0,
        "user": _pick(payload, "user") or "",
        "qpu_seconds": _pick(payload, "qpu_seconds", "qpuSeconds") or 0,
        "logs": _pick(payload, "logs") or "",
        "results": _pick(payload, "results") or {},
        "status_history": _pick(payload, "status_history", "statusHistory") or [],
    }
    return _validate(Job.model_validate, record, "Job", record["id"])


def normalize_backend(payload: Mapping[str, Any]) -> Backend:
    """Build a canonical ``Backend``; backend status is lower-cased."""
    required = _require(payload, _BACKEND_REQUIRED, "Backend")
    record = {
        "name": str(required["name"]),
        "status": required["status"],
        "qubit_count": _pick(payload, "qubit_count", "qubitCount") or 0,
        "queue_depth": _pick(payload, "queue_depth", "queueDepth") or 0,
        "error_rate": _pick(payload, "error_rate", "errorRate") or 0.0,
    }
    return _validate(Backend.model_validate, record, "Backend", record["name"])


def normalize_batch(
    payloads: Iterable[Mapping[str, Any]],
    normalizer: Callable[[Mapping[str, Any]], T],
    strict: bool = False,
    source: Optional[str] = None,
) -> List[T]:
    """Normalize every payload, rejecting malformed records one at a time.

    With ``strict=True`` the first ``ValidationError`` aborts the whole batch.
    Otherwise the offending record is logged and dropped and the rest of the
    batch is kept.
    """
    out: List[T] = []
    rejected = 0
    for payload in payloads:
        try:
            out.append(normalizer(payload))
        except ValidationError as exc:
            if strict:
                raise
            rejected += 1
            logger.warning("Rejected %s record %s: %s", source or "source", exc.record_id, exc)
    if rejected:
        logger.warning("Dropped %d malformed %s record(s), kept %d", rejected, source or "source", len(out))
    return out
