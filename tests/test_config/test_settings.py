"""Tests for config system."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from topochat.config.models import ExportConfig
from topochat.config.settings import Settings, get_settings


def test_default_settings():
    """Settings should have sane defaults when no config file exists."""
    s = Settings()
    assert s.export.ai_model == "gpt-4o"
    assert s.export.indent == 2
    assert s.export.preview_messages == 3
    assert s.export.preview_chars == 50
    assert s.log_level == "WARNING"


def test_settings_override():
    s = Settings(export=ExportConfig(ai_model="other-model"), log_level="debug")
    assert s.export.ai_model == "other-model"
    assert s.log_level == "DEBUG"


def test_invalid_log_level():
    with pytest.raises(ValidationError):
        Settings(log_level="LOUD")


def test_config_file_values_are_defaults(isolated_config):
    isolated_config.parent.mkdir(parents=True)
    isolated_config.write_text(json.dumps({"log_level": "INFO", "export": {"ai_model": "file-model"}}))

    s = Settings()
    assert s.log_level == "INFO"
    assert s.export.ai_model == "file-model"

    explicit = Settings(log_level="ERROR")
    assert explicit.log_level == "ERROR"


def test_corrupt_config_file_is_ignored(isolated_config):
    isolated_config.parent.mkdir(parents=True)
    isolated_config.write_text("{broken")
    assert Settings().export.ai_model == "gpt-4o"


def test_env_value_keeps_other_config_file_keys(isolated_config, monkeypatch):
    isolated_config.parent.mkdir(parents=True)
    isolated_config.write_text(json.dumps({"export": {"ai_model": "file-model", "indent": 4}}))
    monkeypatch.setenv("TOPOCHAT_EXPORT__AI_MODEL", "env-model")

    s = Settings()
    assert s.export.ai_model == "env-model"
    assert s.export.indent == 4


def test_env_override(monkeypatch):
    monkeypatch.setenv("TOPOCHAT_LOG_LEVEL", "error")
    monkeypatch.setenv("TOPOCHAT_EXPORT__AI_MODEL", "env-model")
    s = Settings()
    assert s.log_level == "ERROR"
    assert s.export.ai_model == "env-model"


def test_save_and_load(isolated_config):
    assert not Settings.config_exists()
    Settings(log_level="INFO", export=ExportConfig(ai_model="saved")).save()
    assert Settings.config_exists()

    data = json.loads(isolated_config.read_text())
    assert data["export"]["ai_model"] == "saved"
    assert Settings().export.ai_model == "saved"


def test_exports_path_expands_user():
    s = Settings(exports_dir="~/somewhere")
    assert "~" not in str(s.exports_path)


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
