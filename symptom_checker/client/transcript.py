"""
Chat transcript: the Message model and its local persistence.

The store is a small JSON file used like browser local storage: a single object
mapping keys to JSON values, with the transcript kept under a fixed key. Each client
session owns its own file (see session_store), so sessions never share history. Loading
never raises; a missing or corrupt transcript reads as None so the session can fall
back to a fresh welcome message.
"""

import json
import logging
import os
import re
import tempfile
import uuid
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

STORAGE_KEY = "symptom-checker-transcript"

_SESSION_ID = re.compile(r"[0-9a-f]{32}")

WELCOME_TEXT = (
    "# Welcome to your AI Health Symptom Checker! 👋\n\n"
    "I am here to help you understand your symptoms using up-to-date information from the web.\n\n"
    "> ⚠️ **Disclaimer:** I am an AI assistant, not a medical professional. This information is for "
    "educational purposes only and is not a substitute for professional medical advice. Always consult "
    "with a qualified healthcare provider for any medical concerns.\n\n"
    "**To get started, please describe your symptoms in detail below.**"
)

GREETING_TEXT = (
    "**New session started.** Describe your symptoms in detail and I will look into them.\n\n"
    "> ⚠️ I am an AI assistant, not a medical professional. Always consult a qualified healthcare provider."
)


class Message(BaseModel):
    """One chat bubble. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    role: Literal["user", "assistant"]
    content: str
    error_flag: bool = False


_transcript_adapter = TypeAdapter(list[Message])


def new_message(role: Literal["user", "assistant"], content: str, error_flag: bool = False) -> Message:
    return Message(id=uuid.uuid4().hex, role=role, content=content, error_flag=error_flag)


def welcome_message() -> Message:
    return new_message("assistant", WELCOME_TEXT)


def greeting_message() -> Message:
    return new_message("assistant", GREETING_TEXT)


def dump_transcript(messages: list[Message]) -> list[dict]:
    return [m.model_dump(mode="json") for m in messages]


def parse_transcript(raw: object) -> list[Message] | None:
    """Validate a decoded JSON value as a transcript. None if it is not a non-empty list of messages."""
    if not isinstance(raw, list) or not raw:
        return None
    try:
        return _transcript_adapter.validate_python(raw)
    except ValidationError as e:
        logger.warning("[transcript] persisted transcript is invalid: %d errors", e.error_count())
        return None


class TranscriptStore:
    """JSON-file key/value storage holding the transcript under STORAGE_KEY."""

    def __init__(self, path: str | Path, key: str = STORAGE_KEY) -> None:
        self.path = Path(path)
        self.key = key

    def _read_all(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("[transcript] could not read %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def load(self) -> list[Message] | None:
        """Return the persisted transcript, or None when absent or unusable."""
        messages = parse_transcript(self._read_all().get(self.key))
        logger.info("[transcript:load] path=%s messages=%s", self.path, len(messages) if messages else None)
        return messages

    def save(self, messages: list[Message]) -> bool:
        """Persist the full transcript. Errors are logged and reported as False."""
        data = self._read_all()
        data[self.key] = dump_transcript(messages)
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".transcript-", suffix=".json")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except OSError as e:
            logger.warning("[transcript:save] failed to persist transcript: %s", e)
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            return False
        return True


def new_session_id() -> str:
    return uuid.uuid4().hex


def is_session_id(value: object) -> bool:
    return isinstance(value, str) and bool(_SESSION_ID.fullmatch(value))


def session_store(base_path: str | Path, session_id: str) -> TranscriptStore:
    """Store owned by one client session: data/transcript.json -> data/transcript-<session_id>.json."""
    if not is_session_id(session_id):
        raise ValueError(f"invalid session id: {session_id!r}")
    base = Path(base_path)
    return TranscriptStore(base.with_name(f"{base.stem}-{session_id}{base.suffix}"))
