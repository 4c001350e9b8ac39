"""Heuristic structural classification of chat sessions."""

from topochat.topology.classifier import classify, empty_topology
from topochat.topology.export import build_export, build_preview, export_filename, export_json
from topochat.topology.models import (
    Complexity,
    Message,
    Role,
    Session,
    TopologyImpact,
    TopologyPattern,
    TopologyStructure,
)
from topochat.topology.render import render_pattern
from topochat.topology.signals import determine_topology_impact, extract_signals

__all__ = [
    "Complexity",
    "Message",
    "Role",
    "Session",
    "TopologyImpact",
    "TopologyPattern",
    "TopologyStructure",
    "build_export",
    "build_preview",
    "classify",
    "determine_topology_impact",
    "empty_topology",
    "export_filename",
    "export_json",
    "extract_signals",
    "render_pattern",
]
