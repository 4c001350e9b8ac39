"""Paths and default values used across the project."""

from pathlib import Path

# Base directory for all topochat data
TOPOCHAT_HOME = Path.home() / ".topochat"

CONFIG_FILE = TOPOCHAT_HOME / "config.json"
EXPORTS_DIR = TOPOCHAT_HOME / "exports"

# Model that produced assistant replies; stamped into every export
DEFAULT_AI_MODEL = "gpt-4o"

# A session is always one user talking to one assistant
PARTICIPANT_COUNT = 2

# Pattern stored on a freshly created session before any classification
DEFAULT_TOPOLOGY_PATTERN = "s1={[()]}"

# Preview (display-only) export
DEFAULT_PREVIEW_MESSAGES = 3
DEFAULT_PREVIEW_CHARS = 50
PREVIEW_ELLIPSIS = "..."

DEFAULT_EXPORT_INDENT = 2
