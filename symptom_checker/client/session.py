"""
Per-session chat state: transcript, loading flag, connection status.

The UI holds one ChatSession and renders from its fields; nothing here is
process-global. Submission is split in two so a UI can show the user's message
before the relay call completes: begin_submit() appends and marks loading,
complete_submit() performs the call. At most one submission is in flight.
"""

import logging
import threading
import time

from symptom_checker.client.relay_client import ConnectionStatus, RelayClient, RelayClientError
from symptom_checker.client.transcript import (
    Message,
    TranscriptStore,
    greeting_message,
    new_message,
    welcome_message,
)

logger = logging.getLogger(__name__)

APOLOGY_TEXT = (
    "**🚨 Apologies, I was unable to get a response.**\n\n"
    "There seems to be a connection issue. Please check your internet and try again."
)


def error_message(detail: str) -> Message:
    content = APOLOGY_TEXT
    if detail:
        content += f"\n\n*Details: {detail}*"
    return new_message("assistant", content, error_flag=True)


class ChatSession:
    def __init__(self, relay: RelayClient, store: TranscriptStore) -> None:
        self.relay = relay
        self.store = store
        self.messages: list[Message] = []
        self.connection_status: ConnectionStatus = "checking"
        self.pending: str | None = None
        self.last_probe_at: float | None = None
        self._in_flight = threading.Lock()

    @property
    def is_loading(self) -> bool:
        return self._in_flight.locked()

    def _persist(self) -> None:
        if not self.store.save(self.messages):
            logger.warning("[session] transcript not persisted (messages=%d)", len(self.messages))

    def _append(self, message: Message) -> Message:
        self.messages = [*self.messages, message]
        self._persist()
        return message

    def initialize(self) -> None:
        """Load the persisted transcript, or start from the welcome message."""
        loaded = self.store.load()
        if loaded:
            self.messages = loaded
        else:
            self.messages = [welcome_message()]
            self._persist()
        logger.info("[session:initialize] messages=%d restored=%s", len(self.messages), bool(loaded))

    def reset(self) -> None:
        """Replace the transcript with a single new-session greeting. Drops a submission not yet sent."""
        if self.pending is not None:
            self.pending = None
            self._in_flight.release()
        self.messages = [greeting_message()]
        self._persist()
        logger.info("[session:reset] transcript reset")

    def begin_submit(self, text: str) -> str | None:
        """Append the user's message and mark loading. None (no-op) for blank text or while a request is in flight."""
        prompt = (text or "").strip()
        if not prompt:
            return None
        if not self._in_flight.acquire(blocking=False):
            logger.info("[session:begin_submit] ignored: request already in flight")
            return None
        self.pending = prompt
        self._append(new_message("user", prompt))
        return prompt

    def complete_submit(self) -> Message | None:
        """Send the pending message to the relay and append the reply or an error message."""
        if self.pending is None:
            return None
        prompt, self.pending = self.pending, None
        try:
            try:
                reply = self.relay.ask(prompt)
                result = new_message("assistant", reply)
            except RelayClientError as e:
                logger.warning("[session:complete_submit] relay call failed: %s", e)
                self.connection_status = "error"
                result = error_message(str(e))
            except Exception as e:
                logger.exception("[session:complete_submit] unexpected failure")
                self.connection_status = "error"
                result = error_message(type(e).__name__)
            return self._append(result)
        finally:
            self._in_flight.release()

    def submit(self, text: str) -> Message | None:
        """Full turn: append the user message, call the relay, append the result."""
        if self.begin_submit(text) is None:
            return None
        return self.complete_submit()

    def check_health(self) -> ConnectionStatus:
        """Advisory reachability check; never touches the transcript or the in-flight gate."""
        self.connection_status = self.relay.probe()
        return self.connection_status

    def check_health_if_due(self, interval: float, now: float | None = None) -> ConnectionStatus:
        """Check health at most once per `interval` seconds; otherwise return the last known status."""
        now = time.monotonic() if now is None else now
        if self.last_probe_at is not None and now - self.last_probe_at < interval:
            return self.connection_status
        self.last_probe_at = now
        return self.check_health()
