"""External request schemas for analysis runs."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AnalysisRequest(BaseModel):
    """One user action: the document bytes plus the chosen model label."""

    file_bytes: bytes
    model_selector: str
    filename: str | None = None

    model_config = ConfigDict(extra="forbid", frozen=True, protected_namespaces=())

    @field_validator("file_bytes")
    @classmethod
    def _require_content(cls, value: bytes) -> bytes:
        if not value:
            raise ValueError("file_bytes must not be empty")
        return value

    @field_validator("model_selector")
    @classmethod
    def _strip_selector(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("model_selector must not be blank")
        return cleaned


class AnalyzeOptions(BaseModel):
    """Per-run overrides. All fields are optional and validated."""

    poll_interval_seconds: float | None = Field(default=None, ge=0)
    poll_max_ticks: int | None = Field(default=None, ge=1)

    model_config = ConfigDict(extra="forbid")


__all__ = ["AnalysisRequest", "AnalyzeOptions"]
