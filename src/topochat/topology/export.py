"""Build one canonical, JSON-serializable export document per session.

The document uses snake_case keys regardless of how callers name things;
that is the external download format. Full exports carry complete message
content; :func:`build_preview` is the truncated, display-only variant.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from typing import Any

from topochat.config.constants import PARTICIPANT_COUNT, PREVIEW_ELLIPSIS
from topochat.config.models import ExportConfig
from topochat.topology.models import Message, Session, TopologyPattern


def _resolve_config(config: ExportConfig | None, ai_model: str | None = None) -> ExportConfig:
    if config is None:
        from topochat.config.settings import get_settings

        config = get_settings().export
    if ai_model:
        config = config.model_copy(update={"ai_model": ai_model})
    return config


def _as_session(session: Session | Mapping[str, Any]) -> Session:
    if isinstance(session, Session):
        return session
    return Session.model_validate(session)


def _as_message(message: Message | Mapping[str, Any]) -> Message:
    if isinstance(message, Message):
        return message
    return Message.model_validate(message)


def _iso(value: datetime) -> str:
    return value.isoformat()


def _truncate(content: str, limit: int) -> str:
    if len(content) <= limit:
        return content
    return content[:limit] + PREVIEW_ELLIPSIS


def export_filename(session_id: str) -> str:
    """Download filename for a session export."""
    return f"session_{session_id}.json"


def _document(
    session_id: str,
    session: Session,
    messages: list[Message],
    projected: list[dict[str, Any]],
    topology: TopologyPattern,
    config: ExportConfig,
    now: datetime | None,
) -> dict[str, Any]:
    return {
        "session_id": session_id,
        "timestamp": _iso(now or datetime.now(UTC)),
        "title": session.title,
        "topology": topology.to_export_dict(),
        "messages": projected,
        "metadata": {
            "participant_count": PARTICIPANT_COUNT,
            "ai_model": config.ai_model,
            "total_messages": len(messages),
            "created_at": _iso(session.created_at),
            "updated_at": _iso(session.updated_at),
        },
    }


def build_export(
    session_id: str,
    session: Session | Mapping[str, Any],
    messages: Iterable[Message | Mapping[str, Any]],
    topology: TopologyPattern,
    *,
    config: ExportConfig | None = None,
    ai_model: str | None = None,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Assemble the full export document for a session.

    ``config`` defaults to the ``export`` section of the loaded settings and
    ``ai_model`` overrides the model recorded in it;
    ``now`` stamps the generation time (defaults to the current UTC time).
    """
    config = _resolve_config(config, ai_model)
    records = [_as_message(m) for m in messages]
    projected = [
        {
            "id": msg.id,
            "role": msg.role.value,
            "content": msg.content,
            "topology_impact": msg.topology_impact,
            "timestamp": _iso(msg.created_at),
            "metadata": msg.metadata,
        }
        for msg in records
    ]
    return _document(session_id, _as_session(session), records, projected, topology, config, now)


def build_preview(
    session_id: str,
    session: Session | Mapping[str, Any],
    messages: Iterable[Message | Mapping[str, Any]],
    topology: TopologyPattern,
    *,
    config: ExportConfig | None = None,
    ai_model: str | None = None,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Display-only export: first few messages, content truncated, no metadata.

    ``metadata.total_messages`` still counts every message.
    """
    config = _resolve_config(config, ai_model)
    records = [_as_message(m) for m in messages]
    projected = [
        {
            "id": msg.id,
            "role": msg.role.value,
            "content": _truncate(msg.content, config.preview_chars),
            "topology_impact": msg.topology_impact,
            "timestamp": _iso(msg.created_at),
        }
        for msg in records[: config.preview_messages]
    ]
    return _document(session_id, _as_session(session), records, projected, topology, config, now)


def export_json(
    session_id: str,
    session: Session | Mapping[str, Any],
    messages: Iterable[Message | Mapping[str, Any]],
    topology: TopologyPattern,
    *,
    config: ExportConfig | None = None,
    ai_model: str | None = None,
    now: datetime | None = None,
) -> str:
    """Serialize :func:`build_export` using the configured indentation."""
    config = _resolve_config(config, ai_model)
    document = build_export(session_id, session, messages, topology, config=config, now=now)
    return json.dumps(document, indent=config.indent, ensure_ascii=False)
