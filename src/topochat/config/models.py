"""Pydantic models for configuration sub-sections."""

from __future__ import annotations

from pydantic import BaseModel, model_validator

from topochat.config.constants import (
    DEFAULT_AI_MODEL,
    DEFAULT_EXPORT_INDENT,
    DEFAULT_PREVIEW_CHARS,
    DEFAULT_PREVIEW_MESSAGES,
)


class ExportConfig(BaseModel):
    """Session export settings."""

    ai_model: str = DEFAULT_AI_MODEL
    indent: int = DEFAULT_EXPORT_INDENT
    preview_messages: int = DEFAULT_PREVIEW_MESSAGES
    preview_chars: int = DEFAULT_PREVIEW_CHARS

    @model_validator(mode="after")
    def validate_limits(self) -> "ExportConfig":
        if not self.ai_model.strip():
            raise ValueError("ai_model must not be empty")
        if self.indent < 0:
            raise ValueError(f"indent must be >= 0, got {self.indent}")
        if self.preview_messages < 1:
            raise ValueError(f"preview_messages must be >= 1, got {self.preview_messages}")
        if self.preview_chars < 1:
            raise ValueError(f"preview_chars must be >= 1, got {self.preview_chars}")
        return self
