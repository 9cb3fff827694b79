"""External response schemas for analysis runs."""

from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field

from schemas.internal.documents import NormalizedDocument


class AnalysisRunResult(BaseModel):
    document: NormalizedDocument
    model_selector: str
    model_id: str
    filename: str | None = None
    runtime_ms: int | None = None
    warnings: List[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid", protected_namespaces=())


class ModelCatalog(BaseModel):
    default_model: str
    fallback_model_id: str
    models: dict[str, str]

    model_config = ConfigDict(protected_namespaces=())


class ErrorResponse(BaseModel):
    kind: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


__all__ = ["AnalysisRunResult", "ErrorResponse", "ModelCatalog"]
