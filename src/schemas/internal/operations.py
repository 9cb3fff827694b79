"""Contracts for in-flight analysis operations."""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from schemas.internal.raw import RawAnalyzeResult, RawError

ProgressState = Literal[
    "submitted",
    "polling",
    "succeeded",
    "failed",
    "timed_out",
    "cancelled",
]


class OperationHandle(BaseModel):
    """Poll URI returned in the ``operation-location`` header."""

    url: str
    model_id: str

    model_config = ConfigDict(frozen=True, protected_namespaces=())


class Running(BaseModel):
    kind: Literal["running"] = "running"
    status: str = "running"

    model_config = ConfigDict(frozen=True)


class Succeeded(BaseModel):
    kind: Literal["succeeded"] = "succeeded"
    result: RawAnalyzeResult

    model_config = ConfigDict(frozen=True)


class Failed(BaseModel):
    kind: Literal["failed"] = "failed"
    reason: str
    error: Optional[RawError] = None

    model_config = ConfigDict(frozen=True)


PollOutcome = Annotated[Union[Running, Succeeded, Failed], Field(discriminator="kind")]


class AnalysisProgress(BaseModel):
    """Progress derived from real poll ticks."""

    state: ProgressState
    tick: int = Field(default=0, ge=0)
    max_ticks: int = Field(ge=1)

    model_config = ConfigDict(frozen=True)

    @property
    def fraction(self) -> float:
        if self.state == "succeeded":
            return 1.0
        return min(self.tick / self.max_ticks, 1.0)


__all__ = [
    "AnalysisProgress",
    "Failed",
    "OperationHandle",
    "PollOutcome",
    "ProgressState",
    "Running",
    "Succeeded",
]
