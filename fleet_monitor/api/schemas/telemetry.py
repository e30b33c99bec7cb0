"""Response shapes of the metrics endpoint."""
from __future__ import annotations

from typing import Optional

from ...engine.models import TelemetryReport


class MetricsResponse(TelemetryReport):
    """A telemetry report annotated with its provenance.

    ``source`` is ``"real"``, ``"mock"`` or ``"mock (cached)"``; ``note`` is
    set only when a live request fell back to synthetic data.
    """

    source: str
    note: Optional[str] = None

    @classmethod
    def from_report(cls, report: TelemetryReport, source: str, note: Optional[str] = None) -> "MetricsResponse":
        return cls(**dict(report), source=source, note=note)
