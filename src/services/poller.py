"""Poll/await controller for asynchronous analysis operations."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Protocol

from schemas.internal.operations import (
    AnalysisProgress,
    Failed,
    OperationHandle,
    PollOutcome,
    ProgressState,
    Running,
    Succeeded,
)
from schemas.internal.raw import RawAnalyzeResult, RawOperationResult
from services.errors import (
    CancelledError,
    MalformedResultError,
    PollFailedError,
    PollTransportError,
    TimedOutError,
)

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 2.0
DEFAULT_MAX_TICKS = 30

STATUS_SUCCEEDED = "succeeded"
STATUS_FAILED = "failed"

ProgressCallback = Callable[[AnalysisProgress], None]


class PollTransport(Protocol):
    async def poll(self, handle: OperationHandle) -> RawOperationResult: ...


def classify(result: RawOperationResult) -> PollOutcome:
    """Map a poll body to an outcome. Only the literal terminal tokens end the loop."""
    if result.status == STATUS_SUCCEEDED:
        return Succeeded(result=result.analyze_result or RawAnalyzeResult())
    if result.status == STATUS_FAILED:
        error = result.error
        reason = (error.message or error.code) if error else None
        return Failed(reason=reason or "Unknown error", error=error)
    return Running(status=result.status)


class PollController:
    """Drive an operation handle to ``succeeded``, ``failed`` or exhaustion.

    Each tick issues one poll. Between ticks the controller waits ``interval``
    seconds; the wait is released early when ``cancel_event`` is set.
    Cancellation is checked before every poll and before every wait.
    Transport errors count as ticks but never end the loop on their own.
    """

    def __init__(
        self,
        *,
        interval: float = DEFAULT_POLL_INTERVAL,
        max_ticks: int = DEFAULT_MAX_TICKS,
    ) -> None:
        if interval < 0:
            raise ValueError("interval must be >= 0")
        if max_ticks < 1:
            raise ValueError("max_ticks must be >= 1")
        self.interval = interval
        self.max_ticks = max_ticks

    async def wait(
        self,
        transport: PollTransport,
        handle: OperationHandle,
        *,
        cancel_event: asyncio.Event | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> RawAnalyzeResult:
        transport_errors = 0
        last_error: PollTransportError | None = None
        tick = 0
        self._emit(on_progress, "submitted", tick)

        try:
            while tick < self.max_ticks:
                self._raise_if_cancelled(cancel_event, tick)
                tick += 1
                try:
                    raw = await transport.poll(handle)
                except PollTransportError as exc:
                    transport_errors += 1
                    last_error = exc
                    logger.warning("Poll tick %d/%d failed: %s", tick, self.max_ticks, exc)
                except MalformedResultError:
                    self._emit(on_progress, "failed", tick)
                    raise
                else:
                    outcome = classify(raw)
                    if isinstance(outcome, Succeeded):
                        logger.info("Operation succeeded after %d poll(s)", tick)
                        self._emit(on_progress, "succeeded", tick)
                        return outcome.result
                    if isinstance(outcome, Failed):
                        logger.error("Operation failed after %d poll(s): %s", tick, outcome.reason)
                        self._emit(on_progress, "failed", tick)
                        raise PollFailedError(
                            outcome.reason,
                            code=outcome.error.code if outcome.error else None,
                            detail=outcome.error.model_dump() if outcome.error else None,
                        )
                    logger.debug("Poll tick %d/%d: %s", tick, self.max_ticks, outcome.status)

                self._emit(on_progress, "polling", tick)
                if tick < self.max_ticks:
                    self._raise_if_cancelled(cancel_event, tick)
                    await self._pause(cancel_event)
        except asyncio.CancelledError:
            logger.debug("Polling cancelled at tick %d", tick)
            self._emit(on_progress, "cancelled", tick)
            raise

        self._emit(on_progress, "timed_out", tick)
        message = f"Operation did not finish within {self.max_ticks} polls"
        if transport_errors:
            message += f" ({transport_errors} failed poll request(s))"
        raise TimedOutError(
            message, ticks=tick, transport_errors=transport_errors
        ) from last_error

    async def _pause(self, cancel_event: asyncio.Event | None) -> None:
        if self.interval <= 0:
            await asyncio.sleep(0)
            return
        if cancel_event is None:
            await asyncio.sleep(self.interval)
            return
        try:
            await asyncio.wait_for(cancel_event.wait(), timeout=self.interval)
        except asyncio.TimeoutError:
            pass

    def _raise_if_cancelled(self, cancel_event: asyncio.Event | None, tick: int) -> None:
        if cancel_event is not None and cancel_event.is_set():
            raise CancelledError(ticks=tick)

    def _emit(
        self,
        on_progress: ProgressCallback | None,
        state: ProgressState,
        tick: int,
    ) -> None:
        if on_progress is None:
            return
        on_progress(AnalysisProgress(state=state, tick=tick, max_ticks=self.max_ticks))


__all__ = [
    "DEFAULT_MAX_TICKS",
    "DEFAULT_POLL_INTERVAL",
    "PollController",
    "PollTransport",
    "ProgressCallback",
    "classify",
]
