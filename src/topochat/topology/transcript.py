"""Load chat transcripts from JSON files."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError

from topochat.topology.models import Message, Session

logger = logging.getLogger("topochat.topology.transcript")

UNTITLED_SESSION = "Untitled session"


class TranscriptError(ValueError):
    """A transcript file could not be read or has the wrong shape."""


@dataclass
class Transcript:
    session: Session
    messages: list[Message]


def parse_transcript(data: object) -> Transcript:
    """Build a transcript from decoded JSON.

    Accepts either a bare list of messages or an object of the form
    ``{"session": {...}, "messages": [...]}``.
    """
    if isinstance(data, list):
        raw_session: object = {}
        raw_messages: object = data
    elif isinstance(data, dict):
        raw_session = data.get("session") or {}
        raw_messages = data.get("messages")
    else:
        raise TranscriptError("Transcript must be a list of messages or an object with 'messages'")

    if not isinstance(raw_messages, list):
        raise TranscriptError("Transcript 'messages' must be a list")
    if not isinstance(raw_session, dict):
        raise TranscriptError("Transcript 'session' must be an object")

    try:
        session = Session.model_validate({"title": UNTITLED_SESSION, **raw_session})
        messages = [Message.model_validate(raw) for raw in raw_messages]
    except ValidationError as exc:
        raise TranscriptError(f"Invalid transcript: {exc}") from exc

    return Transcript(session=session, messages=messages)


def load_transcript(path: Path) -> Transcript:
    """Read and parse a transcript file."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise TranscriptError(f"Cannot read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise TranscriptError(f"{path} is not valid JSON: {exc}") from exc

    transcript = parse_transcript(data)
    logger.debug("Loaded %d messages from %s", len(transcript.messages), path)
    return transcript
