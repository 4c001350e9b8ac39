"""Turn resolved metrics into bracket notation.

Patterns look like ``s3={[()()()],[((()))]}``: the order after ``s``, one
``()`` per thread in the first group, and the nesting-depth parentheses
(wrapped once more) in the second group.
"""

from __future__ import annotations

from topochat.topology.models import TopologyStructure

UNIT = "()"

EMPTY_PATTERN = "s0={}"
MONOLOGUE_PATTERN = "s1={[()]}"

# Depth above which the "deep nesting" factor applies
DEEP_NESTING_DEPTH = 2


def nested(depth: int) -> str:
    """``()`` wrapped in ``depth - 1`` extra pairs of parentheses."""
    pattern = UNIT
    for _ in range(1, depth):
        pattern = f"({pattern})"
    return pattern


def participatory(order: int) -> str:
    return f"s{order}"


def render_pattern(order: int, threads: int, nesting_depth: int) -> str:
    """Render the canonical pattern string.

    Order 0 is the empty conversation and order 1 always renders the
    monologue pattern, whatever the thread count and depth.
    """
    if order <= 0:
        return EMPTY_PATTERN
    if order == 1:
        return MONOLOGUE_PATTERN

    procedural = UNIT * threads
    perspectival = nested(nesting_depth)
    return f"{participatory(order)}={{[{procedural}],[({perspectival})]}}"


def build_structure(order: int, threads: int, nesting_depth: int) -> TopologyStructure:
    perspectival = [UNIT]
    if nesting_depth > 1:
        perspectival.append(nested(nesting_depth - 1))

    return TopologyStructure(
        procedural=[UNIT] * threads,
        perspectival=perspectival,
        participatory=participatory(order),
    )


def prime_factors(order: int, threads: int, nesting_depth: int) -> list[str]:
    """Structural tags in check order. Falls back to ``["p1"]``, never empty."""
    factors: list[str] = []
    if threads >= 2:
        factors.append("p1p1")  # parallel threads
    if order >= 2:
        factors.append("p2")  # dialogue
    if order >= 3:
        factors.append("p3")  # triadic
    if nesting_depth > DEEP_NESTING_DEPTH:
        factors.append("p5")  # deep nesting
    return factors or ["p1"]
