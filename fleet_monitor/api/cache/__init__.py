"""Short-lived caching for generated reports."""
from .manager import SnapshotCache

__all__ = ["SnapshotCache"]
