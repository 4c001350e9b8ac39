"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from unittest.mock import patch

import pytest

from topochat.config.models import ExportConfig
from topochat.config.settings import get_settings
from topochat.topology.models import Message, Session


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path):
    """Point settings at an empty temp config and reset the settings cache."""
    fake_config = tmp_path / "home" / "config.json"
    get_settings.cache_clear()
    with patch("topochat.config.settings.CONFIG_FILE", fake_config):
        yield fake_config
    get_settings.cache_clear()


@pytest.fixture
def make_messages() -> Callable[..., list[Message]]:
    """Build an alternating user/assistant conversation from plain strings."""

    def _make(*contents: str, impacts: dict[int, str] | None = None) -> list[Message]:
        impacts = impacts or {}
        return [
            Message(
                id=f"m{i}",
                session_id="s-test",
                role="user" if i % 2 == 0 else "assistant",
                content=content,
                topology_impact=impacts.get(i),
                created_at=datetime(2024, 5, 1, 12, 0, i, tzinfo=UTC),
            )
            for i, content in enumerate(contents)
        ]

    return _make


@pytest.fixture
def session() -> Session:
    return Session(
        id="s-test",
        title="Topology test",
        created_at=datetime(2024, 5, 1, 12, 0, 0, tzinfo=UTC),
        updated_at=datetime(2024, 5, 1, 12, 5, 0, tzinfo=UTC),
    )


@pytest.fixture
def export_config() -> ExportConfig:
    return ExportConfig(ai_model="gpt-4o")
