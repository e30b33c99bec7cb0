"""Single-slot TTL cache for the synthetic report, with thread safety and an injectable clock."""
from __future__ import annotations

import copy
import threading
import time
from typing import Any, Callable, Optional

from ...config import SYNTHETIC_CACHE_TTL_SECONDS


class SnapshotCache:
    """Thread-safe, process-wide single-slot cache with a fixed TTL.

    The slot is keyed by nothing but wall-clock age: any ``set`` replaces the
    previous value.  All access is protected by a lock so overlapping refreshes
    never observe a torn slot, and values are deep-copied in both directions so
    callers cannot mutate cached state.

    ``clock`` returns seconds on a monotonic scale (``time.monotonic`` by
    default); tests pass their own to control expiry.
    """

    def __init__(
        self,
        ttl: float = SYNTHETIC_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl = float(ttl)
        self._clock = clock
        self._lock = threading.Lock()
        self._value: Optional[Any] = None
        self._stored_at: Optional[float] = None

    def _now(self, now: Optional[float]) -> float:
        return self._clock() if now is None else now

    def is_expired(self, now: Optional[float] = None) -> bool:
        """``True`` when the slot is empty or older than ``ttl`` seconds."""
        with self._lock:
            return self._expired_locked(self._now(now))

    def get(self, now: Optional[float] = None) -> Optional[Any]:
        """Return a deep copy of the cached value, or ``None`` if expired / empty."""
        with self._lock:
            if self._expired_locked(self._now(now)):
                self._value = None
                self._stored_at = None
                return None
            return copy.deepcopy(self._value)

    def set(self, value: Any, now: Optional[float] = None) -> None:
        """Store *value*, replacing whatever the slot held."""
        snapshot = copy.deepcopy(value)
        with self._lock:
            self._value = snapshot
            self._stored_at = self._now(now)

    def invalidate(self) -> None:
        """Empty the slot."""
        with self._lock:
            self._value = None
            self._stored_at = None

    def age(self, now: Optional[float] = None) -> Optional[float]:
        """Seconds since the slot was filled, ``None`` when empty."""
        with self._lock:
            if self._stored_at is None:
                return None
            return self._now(now) - self._stored_at

    # ── Internal ──────────────────────────────────────────────────────

    def _expired_locked(self, now: float) -> bool:
        """Must be called under lock."""
        if self._stored_at is None:
            return True
        return now - self._stored_at >= self.ttl
