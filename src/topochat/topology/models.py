"""Pydantic models for chat messages, sessions and topology results."""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from topochat.config.constants import DEFAULT_TOPOLOGY_PATTERN


class Role(StrEnum):
    """Who authored a message."""

    USER = "user"
    ASSISTANT = "assistant"


class TopologyImpact(StrEnum):
    """Tags the chat app attaches to messages as they are created."""

    USER_INPUT = "user_input"
    INQUIRY_BRANCH = "inquiry_branch"
    CLOSURE_ATTEMPT = "closure_attempt"
    THREAD_CONTINUATION = "thread_continuation"
    THREAD_INITIATION = "thread_initiation"


class Complexity(StrEnum):
    EMPTY = "empty"
    MONOLOGUE = "monologue"
    DIALOGUE = "dialogue"
    COMPLEX_DIALOGUE = "complex_dialogue"
    MULTI_THREADED_DISCOURSE = "multi_threaded_discourse"


def _generate_id() -> str:
    return secrets.token_hex(8)


def _now() -> datetime:
    return datetime.now(UTC)


class Message(BaseModel):
    """A single chat message. Immutable once created."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=_generate_id)
    session_id: str | None = Field(
        default=None, validation_alias=AliasChoices("session_id", "sessionId")
    )
    role: Role
    content: str = ""
    topology_impact: str | None = Field(
        default=None, validation_alias=AliasChoices("topology_impact", "topologyImpact")
    )
    metadata: dict[str, Any] | None = None
    created_at: datetime = Field(
        default_factory=_now, validation_alias=AliasChoices("created_at", "createdAt")
    )

    @field_validator("content", mode="before")
    @classmethod
    def coerce_content(cls, value: Any) -> str:
        # Missing or non-text content classifies as empty text
        return value if isinstance(value, str) else ""


class Session(BaseModel):
    """A chat session and the topology snapshot last computed for it."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=_generate_id)
    title: str
    topology_pattern: str = Field(
        default=DEFAULT_TOPOLOGY_PATTERN,
        validation_alias=AliasChoices("topology_pattern", "topologyPattern"),
    )
    topology_order: int = Field(
        default=1, validation_alias=AliasChoices("topology_order", "topologyOrder")
    )
    thread_count: int = Field(
        default=1, validation_alias=AliasChoices("thread_count", "threadCount")
    )
    message_count: int = Field(
        default=0, validation_alias=AliasChoices("message_count", "messageCount")
    )
    is_active: bool = Field(default=False, validation_alias=AliasChoices("is_active", "isActive"))
    created_at: datetime = Field(
        default_factory=_now, validation_alias=AliasChoices("created_at", "createdAt")
    )
    updated_at: datetime = Field(
        default_factory=_now, validation_alias=AliasChoices("updated_at", "updatedAt")
    )

    def with_topology(self, topology: TopologyPattern, message_count: int) -> Session:
        """Return a copy of this session carrying *topology* as its latest snapshot."""
        return self.model_copy(
            update={
                "topology_pattern": topology.pattern,
                "topology_order": topology.order,
                "thread_count": topology.threads,
                "message_count": message_count,
                "updated_at": _now(),
            }
        )


@dataclass(frozen=True)
class SignalCounts:
    """Raw counters gathered from one pass over a conversation."""

    message_count: int
    branching_points: int
    closure_attempts: int


@dataclass(frozen=True)
class ThreadAnalysis:
    """Derived metrics handed from the resolver to the renderer."""

    order: int
    threads: int
    nesting_depth: int
    branching_points: int
    closure_attempts: int


class TopologyStructure(BaseModel):
    model_config = ConfigDict(frozen=True)

    procedural: list[str] = Field(default_factory=list)
    perspectival: list[str] = Field(default_factory=list)
    participatory: str = "s0"


class TopologyPattern(BaseModel):
    """The classification result for a whole conversation."""

    model_config = ConfigDict(frozen=True)

    pattern: str
    order: int
    threads: int
    complexity: Complexity
    prime_factors: list[str] = Field(default_factory=list)
    structure: TopologyStructure = Field(default_factory=TopologyStructure)
    nesting_depth: int

    def to_export_dict(self) -> dict[str, Any]:
        """The ``topology`` block of an export document."""
        return {
            "pattern": self.pattern,
            "order": self.order,
            "threads": self.threads,
            "complexity": self.complexity.value,
            "prime_factors": list(self.prime_factors),
            "structure": self.structure.model_dump(mode="json"),
            "nesting_depth": self.nesting_depth,
        }
