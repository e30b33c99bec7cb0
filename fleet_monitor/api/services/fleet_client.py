"""
HTTP client for the live fleet API (``/backends`` and ``/jobs``).

Any non-2xx status, transport fault, or payload that is not a JSON array is
reported as ``FetchError``; callers decide how to recover.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from ...config import LIVE_JOB_FETCH_LIMIT

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """The live fleet API was unreachable or answered with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class FleetApiClient:
    """Thin synchronous wrapper around a ``requests.Session``."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = str(base_url).rstrip("/")
        self.timeout_seconds = float(timeout_seconds)
        self.session = session or requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _get_list(self, path: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        url = self._url(path)
        try:
            resp = self.session.get(
                url,
                params=params,
                headers={"Accept": "application/json"},
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as exc:
            raise FetchError(f"GET {url} failed: {exc}") from exc

        if not 200 <= resp.status_code < 300:
            raise FetchError(
                f"GET {url} returned {resp.status_code} {resp.reason or ''}".rstrip(),
                status_code=resp.status_code,
            )
        try:
            payload = resp.json()
        except ValueError as exc:
            raise FetchError(f"GET {url} returned invalid JSON: {exc}", status_code=resp.status_code) from exc
        if not isinstance(payload, list):
            raise FetchError(
                f"GET {url} returned {type(payload).__name__}, expected a JSON array",
                status_code=resp.status_code,
            )
        logger.debug("GET %s -> %d records", url, len(payload))
        return payload

    def fetch_backends(self) -> List[Dict[str, Any]]:
        """Raw backend payloads."""
        return self._get_list("/backends")

    def fetch_jobs(self, limit: int = LIVE_JOB_FETCH_LIMIT) -> List[Dict[str, Any]]:
        """Raw job payloads, newest ``limit`` as ordered by the server."""
        return self._get_list("/jobs", params={"limit": int(limit)})

    def close(self) -> None:
        self.session.close()
