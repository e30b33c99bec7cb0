"""Pydantic schemas for API request/response models."""
from .envelope import ApiResponse, ResponseMeta
from .telemetry import MetricsResponse

__all__ = ["ApiResponse", "MetricsResponse", "ResponseMeta"]
