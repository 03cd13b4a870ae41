"""
HTTP client for the relay, used by the chat UI.

ask() returns the reply or raises RelayClientError with a short, user-safe reason;
probe() is a read-only liveness check that never raises.
"""

import logging
from typing import Literal

import requests

from symptom_checker.core.config import PROBE_TIMEOUT, RELAY_TIMEOUT

logger = logging.getLogger(__name__)

ConnectionStatus = Literal["checking", "online", "error", "offline"]

STATUS_LABELS: dict[str, str] = {
    "online": "Connected",
    "error": "Backend Error",
    "offline": "Offline",
    "checking": "Checking...",
}


class RelayClientError(Exception):
    """Transport failure, timeout, non-success status, or unusable reply."""


class RelayClient:
    def __init__(
        self,
        base_url: str,
        timeout: float = RELAY_TIMEOUT,
        probe_timeout: float = PROBE_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self.probe_timeout = probe_timeout
        self.session = session or requests.Session()

    def ask(self, message: str) -> str:
        """POST {"message": ...} and return the reply text."""
        try:
            r = self.session.post(self.base_url, json={"message": message}, timeout=self.timeout)
        except requests.Timeout as e:
            logger.warning("[relay_client:ask] timed out after %.0fs", self.timeout)
            raise RelayClientError(f"Request timed out after {self.timeout:.0f}s") from e
        except requests.RequestException as e:
            logger.warning("[relay_client:ask] request failed: %s", e)
            raise RelayClientError(f"Request failed: {type(e).__name__}") from e
        if not r.ok:
            logger.warning("[relay_client:ask] HTTP %s: %s", r.status_code, r.text[:200])
            raise RelayClientError(f"HTTP {r.status_code}")
        try:
            data = r.json()
        except ValueError as e:
            raise RelayClientError("Invalid response format from backend.") from e
        reply = data.get("reply") if isinstance(data, dict) else None
        if not isinstance(reply, str) or not reply.strip():
            raise RelayClientError("Invalid response format from backend.")
        return reply

    def probe(self) -> ConnectionStatus:
        """GET the relay root; online on success, error on a bad status, offline when unreachable."""
        try:
            r = self.session.get(self.base_url, timeout=self.probe_timeout)
        except requests.RequestException as e:
            logger.info("[relay_client:probe] unreachable: %s", e)
            return "offline"
        return "online" if r.ok else "error"
