"""Error taxonomy for document analysis runs."""

from __future__ import annotations

import asyncio
from typing import Any


class AnalysisError(Exception):
    """Base class for analysis failures surfaced to callers."""

    kind = "analysis"

    def details(self) -> dict[str, Any]:
        return {}

    def to_payload(self) -> dict[str, Any]:
        return {"kind": self.kind, "message": str(self), "details": self.details()}


class ConfigurationError(AnalysisError):
    """Endpoint or credentials are missing."""

    kind = "configuration"


class SubmissionError(AnalysisError):
    """The service rejected the submission or returned no operation handle."""

    kind = "submission"

    def __init__(self, message: str, *, status_code: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    def details(self) -> dict[str, Any]:
        return {"status_code": self.status_code, "body": self.body}


class PollTransportError(AnalysisError):
    """A single poll request failed at the HTTP or network layer."""

    kind = "poll_transport"

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

    def details(self) -> dict[str, Any]:
        return {"status_code": self.status_code}


class PollFailedError(AnalysisError):
    """The service reported ``status: failed`` for the operation."""

    kind = "poll_failed"

    def __init__(self, service_reason: str, *, code: str | None = None, detail: Any = None) -> None:
        super().__init__(f"Analysis failed: {service_reason}")
        self.service_reason = service_reason
        self.code = code
        self.detail = detail

    def details(self) -> dict[str, Any]:
        return {"service_reason": self.service_reason, "code": self.code}


class MalformedResultError(AnalysisError):
    """The service finished but its result body could not be read. Not retried."""

    kind = "malformed_result"

    def __init__(self, message: str, *, status: str | None = None) -> None:
        super().__init__(message)
        self.status = status

    def details(self) -> dict[str, Any]:
        return {"status": self.status}


class TimedOutError(AnalysisError):
    """The poll budget ran out before the service reached a terminal status."""

    kind = "timed_out"

    def __init__(self, message: str, *, ticks: int, transport_errors: int = 0) -> None:
        super().__init__(message)
        self.ticks = ticks
        self.transport_errors = transport_errors

    def details(self) -> dict[str, Any]:
        return {"ticks": self.ticks, "transport_errors": self.transport_errors}


class CancelledError(asyncio.CancelledError):
    """The caller abandoned the analysis. Not a service failure."""

    kind = "cancelled"

    def __init__(self, message: str = "Analysis cancelled", *, ticks: int = 0) -> None:
        super().__init__(message)
        self.ticks = ticks


__all__ = [
    "AnalysisError",
    "CancelledError",
    "ConfigurationError",
    "MalformedResultError",
    "PollFailedError",
    "PollTransportError",
    "SubmissionError",
    "TimedOutError",
]
