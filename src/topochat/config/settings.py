"""Central settings — loads from ~/.topochat/config.json + environment variables."""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from topochat.config.constants import CONFIG_FILE, EXPORTS_DIR, TOPOCHAT_HOME
from topochat.config.models import ExportConfig

logger = logging.getLogger("topochat.config")

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _merge_defaults(defaults: dict, overrides: dict) -> dict:
    """Overlay *overrides* on *defaults*, merging nested sections key by key."""
    merged = dict(defaults)
    for key, value in overrides.items():
        if value is None:
            continue
        base = merged.get(key)
        if isinstance(base, dict) and isinstance(value, dict):
            merged[key] = _merge_defaults(base, value)
        else:
            merged[key] = value
    return merged


class Settings(BaseSettings):
    """All topochat configuration in one place.

    Priority (highest → lowest):
      1. Environment variables (TOPOCHAT_ prefix, ``__`` for nesting)
      2. .env file
      3. ~/.topochat/config.json
      4. Defaults defined here
    """

    model_config = SettingsConfigDict(
        env_prefix="TOPOCHAT_",
        env_nested_delimiter="__",
        env_file=(".env", str(TOPOCHAT_HOME / ".env")),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    export: ExportConfig = Field(default_factory=ExportConfig)

    log_level: str = "WARNING"
    exports_dir: str = str(EXPORTS_DIR)

    @model_validator(mode="before")
    @classmethod
    def load_config_file(cls, values: dict) -> dict:
        """Merge config.json values as defaults (explicit values still override)."""
        if CONFIG_FILE.exists():
            try:
                file_data = json.loads(CONFIG_FILE.read_text(encoding="utf-8"))
            except (json.JSONDecodeError, OSError) as exc:
                logger.warning("Ignoring unreadable config file %s: %s", CONFIG_FILE, exc)
            else:
                if isinstance(file_data, dict):
                    values = _merge_defaults(file_data, values)
        return values

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}, got {value!r}")
        return level

    @property
    def exports_path(self) -> Path:
        """Resolved export directory."""
        return Path(self.exports_dir).expanduser()

    def save(self) -> None:
        """Persist current settings to config.json."""
        CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
        data = self.model_dump(mode="json")
        CONFIG_FILE.write_text(json.dumps(data, indent=2), encoding="utf-8")

    @classmethod
    def config_exists(cls) -> bool:
        return CONFIG_FILE.exists()


@lru_cache
def get_settings() -> Settings:
    """Singleton settings instance."""
    return Settings()
