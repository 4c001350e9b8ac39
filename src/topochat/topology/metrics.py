"""Fold raw signal counts into order, threads and depth.

The thresholds below are fixed policy. They are heuristic and carry no
derivation; change them here and nowhere else.
"""

from __future__ import annotations

import math

from topochat.topology.models import Complexity, SignalCounts, ThreadAnalysis

# Order tiers. Each comparison is strict (count must exceed the value).
DIALOGUE_MIN_MESSAGES = 3
COMPLEX_MIN_MESSAGES = 8
COMPLEX_MIN_BRANCHES = 2
DISCOURSE_MIN_MESSAGES = 15
DISCOURSE_MIN_BRANCHES = 4

MIN_ORDER = 1
MAX_NESTING_DEPTH = 4

# Two branching points open one extra thread / nesting level
BRANCHES_PER_LEVEL = 2

_COMPLEXITY_BY_ORDER = {
    1: Complexity.MONOLOGUE,
    2: Complexity.DIALOGUE,
    3: Complexity.COMPLEX_DIALOGUE,
}


def resolve_order(message_count: int, branching_points: int) -> int:
    """Coarse tier 1-4. Later tiers override earlier ones."""
    order = MIN_ORDER
    if message_count > DIALOGUE_MIN_MESSAGES:
        order = 2
    if message_count > COMPLEX_MIN_MESSAGES or branching_points > COMPLEX_MIN_BRANCHES:
        order = 3
    if message_count > DISCOURSE_MIN_MESSAGES or branching_points > DISCOURSE_MIN_BRANCHES:
        order = 4
    return order


def resolve_threads(order: int, branching_points: int) -> int:
    by_branches = math.ceil(branching_points / BRANCHES_PER_LEVEL) + 1
    return max(1, min(order + 1, by_branches))


def resolve_nesting_depth(branching_points: int) -> int:
    return min(MAX_NESTING_DEPTH, max(1, branching_points // BRANCHES_PER_LEVEL + 1))


def resolve_complexity(order: int) -> Complexity:
    return _COMPLEXITY_BY_ORDER.get(order, Complexity.MULTI_THREADED_DISCOURSE)


def resolve(signals: SignalCounts) -> ThreadAnalysis:
    """Derive the full metric set for a non-empty conversation.

    ``closure_attempts`` is carried through untouched; no metric depends on it.
    """
    order = resolve_order(signals.message_count, signals.branching_points)
    return ThreadAnalysis(
        order=order,
        threads=resolve_threads(order, signals.branching_points),
        nesting_depth=resolve_nesting_depth(signals.branching_points),
        branching_points=signals.branching_points,
        closure_attempts=signals.closure_attempts,
    )
