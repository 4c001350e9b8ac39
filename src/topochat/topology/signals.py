"""Signal extraction: one pass over a conversation using pure string heuristics.

A message is a branching point when it opens a new line of inquiry and a
closure attempt when it tries to wrap a thread up. The two are counted
independently, so one message can be both.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from topochat.topology.models import SignalCounts, TopologyImpact

# Matched against the raw content
_BRANCHING_MARKS = ("?",)

# Matched against the lowercased content
_BRANCHING_WORDS = ("what", "how")
_CLOSURE_WORDS = ("conclusion", "summary")


def _read(message: Any, *names: str) -> Any:
    """Fetch the first non-None field from a Message or a plain mapping."""
    for name in names:
        if isinstance(message, Mapping):
            value = message.get(name)
        else:
            value = getattr(message, name, None)
        if value is not None:
            return value
    return None


def message_content(message: Any) -> str:
    content = _read(message, "content")
    return content if isinstance(content, str) else ""


def message_impact(message: Any) -> str | None:
    impact = _read(message, "topology_impact", "topologyImpact")
    return impact if isinstance(impact, str) else None


def is_branching(content: str) -> bool:
    """True when *content* carries a question or an inquiry word."""
    if any(mark in content for mark in _BRANCHING_MARKS):
        return True
    lower = content.lower()
    return any(word in lower for word in _BRANCHING_WORDS)


def is_closure(content: str, topology_impact: str | None = None) -> bool:
    """True when *content* reads as a wrap-up or the message is tagged as one."""
    lower = content.lower()
    if any(word in lower for word in _CLOSURE_WORDS):
        return True
    return topology_impact == TopologyImpact.CLOSURE_ATTEMPT.value


def extract_signals(messages: Iterable[Any]) -> SignalCounts:
    """Count messages, branching points and closure attempts.

    Accepts :class:`~topochat.topology.models.Message` instances or plain
    mappings. Records are taken in the order given and never rejected.
    """
    message_count = 0
    branching_points = 0
    closure_attempts = 0

    for message in messages:
        message_count += 1
        content = message_content(message)
        if is_branching(content):
            branching_points += 1
        if is_closure(content, message_impact(message)):
            closure_attempts += 1

    return SignalCounts(
        message_count=message_count,
        branching_points=branching_points,
        closure_attempts=closure_attempts,
    )


def determine_topology_impact(content: str, message_count: int) -> str:
    """Tag a freshly generated reply by the effect it has on the conversation.

    *message_count* is the number of messages already in the conversation.
    """
    if is_branching(content):
        return TopologyImpact.INQUIRY_BRANCH.value
    lower = content.lower()
    if any(word in lower for word in _CLOSURE_WORDS):
        return TopologyImpact.CLOSURE_ATTEMPT.value
    if message_count > 1:
        return TopologyImpact.THREAD_CONTINUATION.value
    return TopologyImpact.THREAD_INITIATION.value
