"""Environment-driven settings for the API layer."""
from __future__ import annotations

import logging
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..config import SYNTHETIC_JOB_COUNT

logger = logging.getLogger(__name__)


class ApiSettings(BaseSettings):
    """Immutable settings loaded from environment / .env file."""

    host: str = "0.0.0.0"
    port: int = 9002
    cors_origins: str = "http://localhost:3000,http://localhost:9002"
    log_level: str = "INFO"
    log_format: str = "structured"  # structured | json

    # Live fleet API; the bare BACKEND_API_URL variable is honoured too.
    backend_api_url: str = Field(
        default="http://localhost:8000/api",
        validation_alias=AliasChoices("FLEET_API_BACKEND_API_URL", "BACKEND_API_URL"),
    )
    fetch_timeout_seconds: float = 10.0

    # Day / week / month boundaries and chart labels are computed in this zone.
    report_timezone: str = "UTC"

    synthetic_seed: Optional[int] = None
    synthetic_job_count: int = SYNTHETIC_JOB_COUNT

    # Abort a whole live batch on the first malformed record instead of dropping it.
    strict_validation: bool = False

    model_config = SettingsConfigDict(env_prefix="FLEET_API_", env_file=".env", extra="ignore", populate_by_name=True)

    @field_validator("report_timezone")
    @classmethod
    def _known_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone {v!r}") from exc
        return v
