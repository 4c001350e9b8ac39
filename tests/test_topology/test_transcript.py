"""Tests for transcript loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from topochat.topology.transcript import TranscriptError, load_transcript, parse_transcript


def test_bare_list():
    transcript = parse_transcript([{"role": "user", "content": "hi"}])
    assert transcript.session.title == "Untitled session"
    assert [m.content for m in transcript.messages] == ["hi"]


def test_session_object():
    transcript = parse_transcript({
        "session": {"id": "s1", "title": "Named", "topologyPattern": "s2={[()],[(())]}"},
        "messages": [{"role": "assistant", "content": "hello", "topologyImpact": "thread_initiation"}],
    })
    assert transcript.session.id == "s1"
    assert transcript.session.title == "Named"
    assert transcript.session.topology_pattern == "s2={[()],[(())]}"
    assert transcript.messages[0].topology_impact == "thread_initiation"


@pytest.mark.parametrize("data", [
    "nope",
    42,
    {"messages": "nope"},
    {"session": "x", "messages": []},
    [{"role": "narrator", "content": "x"}],
])
def test_invalid_shapes(data):
    with pytest.raises(TranscriptError):
        parse_transcript(data)


def test_load_from_file(tmp_path: Path):
    path = tmp_path / "t.json"
    path.write_text(json.dumps([{"role": "user", "content": "hi"}]))
    assert len(load_transcript(path).messages) == 1


def test_load_missing_file(tmp_path: Path):
    with pytest.raises(TranscriptError, match="Cannot read"):
        load_transcript(tmp_path / "missing.json")


def test_load_invalid_json(tmp_path: Path):
    path = tmp_path / "bad.json"
    path.write_text("{not json")
    with pytest.raises(TranscriptError, match="not valid JSON"):
        load_transcript(path)
