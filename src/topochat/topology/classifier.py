"""Conversation topology classifier.

Maps an ordered message sequence to a :class:`TopologyPattern`. Pure and
total: every call recomputes from the full history and no input raises.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from topochat.topology.metrics import resolve, resolve_complexity
from topochat.topology.models import (
    Complexity,
    ThreadAnalysis,
    TopologyPattern,
    TopologyStructure,
)
from topochat.topology.render import (
    EMPTY_PATTERN,
    build_structure,
    participatory,
    prime_factors,
    render_pattern,
)
from topochat.topology.signals import extract_signals

logger = logging.getLogger("topochat.topology.classifier")


def empty_topology() -> TopologyPattern:
    """The fixed result for a conversation with no messages."""
    return TopologyPattern(
        pattern=EMPTY_PATTERN,
        order=0,
        threads=0,
        complexity=Complexity.EMPTY,
        prime_factors=[],
        structure=TopologyStructure(procedural=[], perspectival=[], participatory=participatory(0)),
        nesting_depth=0,
    )


def analyze(messages: Iterable[Any]) -> ThreadAnalysis | None:
    """Resolve metrics for *messages*, or None when there are none."""
    signals = extract_signals(messages)
    if signals.message_count == 0:
        return None
    return resolve(signals)


def classify(messages: Iterable[Any]) -> TopologyPattern:
    """Classify a conversation.

    *messages* are :class:`~topochat.topology.models.Message` instances or
    mappings with ``role``/``content``/``topology_impact`` keys, in
    chronological order.
    """
    analysis = analyze(messages)
    if analysis is None:
        return empty_topology()

    order, threads, depth = analysis.order, analysis.threads, analysis.nesting_depth
    topology = TopologyPattern(
        pattern=render_pattern(order, threads, depth),
        order=order,
        threads=threads,
        complexity=resolve_complexity(order),
        prime_factors=prime_factors(order, threads, depth),
        structure=build_structure(order, threads, depth),
        nesting_depth=depth,
    )
    logger.debug(
        "Classified conversation as %s (branching=%d, closures=%d): %s",
        topology.complexity.value,
        analysis.branching_points,
        analysis.closure_attempts,
        topology.pattern,
    )
    return topology
