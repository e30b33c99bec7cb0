"""Dependency injection providers."""
from .providers import get_cache, get_orchestrator, get_settings, shutdown_providers

__all__ = ["get_cache", "get_orchestrator", "get_settings", "shutdown_providers"]
