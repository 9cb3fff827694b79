"""Unit tests for the poll/await controller."""

import asyncio

import pytest

from schemas.internal.operations import OperationHandle
from schemas.internal.raw import RawOperationResult
from services.errors import (
    CancelledError,
    MalformedResultError,
    PollFailedError,
    PollTransportError,
    TimedOutError,
)
from services.poller import PollController, classify

HANDLE = OperationHandle(url="https://example.test/operations/1", model_id="prebuilt-read")
RUNNING = {"status": "running"}
SUCCEEDED = {"status": "succeeded", "analyzeResult": {"content": "done"}}


class ScriptedTransport:
    """Returns scripted poll responses; the last one repeats."""

    def __init__(self, *script):
        self.script = list(script)
        self.calls = 0

    async def poll(self, handle):
        step = self.script[min(self.calls, len(self.script) - 1)]
        self.calls += 1
        if isinstance(step, Exception):
            raise step
        return RawOperationResult.model_validate(step)


def _wait(transport, **kwargs):
    controller = PollController(interval=kwargs.pop("interval", 0), max_ticks=kwargs.pop("max_ticks", 30))
    return asyncio.run(controller.wait(transport, HANDLE, **kwargs))


def test_resolves_after_five_running_ticks():
    transport = ScriptedTransport(RUNNING, RUNNING, RUNNING, RUNNING, RUNNING, SUCCEEDED)
    result = _wait(transport)
    assert result.content == "done"
    assert transport.calls == 6


def test_not_started_counts_as_running():
    transport = ScriptedTransport({"status": "notStarted"}, SUCCEEDED)
    assert _wait(transport).content == "done"
    assert transport.calls == 2


def test_times_out_after_exactly_max_ticks():
    transport = ScriptedTransport(RUNNING)
    with pytest.raises(TimedOutError) as exc_info:
        _wait(transport)
    assert transport.calls == 30
    assert exc_info.value.ticks == 30
    assert exc_info.value.kind == "timed_out"


def test_transport_errors_are_recovered():
    error = PollTransportError("Poll returned status 503", status_code=503)
    transport = ScriptedTransport(error, error, error, SUCCEEDED)
    assert _wait(transport).content == "done"
    assert transport.calls == 4


def test_transport_errors_still_consume_ticks():
    transport = ScriptedTransport(PollTransportError("down"))
    with pytest.raises(TimedOutError) as exc_info:
        _wait(transport, max_ticks=3)
    assert transport.calls == 3
    assert exc_info.value.transport_errors == 3
    assert isinstance(exc_info.value.__cause__, PollTransportError)


def test_failed_status_raises_with_service_reason():
    transport = ScriptedTransport(
        RUNNING,
        {"status": "failed", "error": {"code": "InvalidContent", "message": "The file is corrupted."}},
    )
    with pytest.raises(PollFailedError) as exc_info:
        _wait(transport)
    assert exc_info.value.service_reason == "The file is corrupted."
    assert exc_info.value.code == "InvalidContent"
    assert transport.calls == 2


def test_failed_status_without_error_body():
    with pytest.raises(PollFailedError, match="Unknown error"):
        _wait(ScriptedTransport({"status": "failed"}))


def test_cancel_during_wait_stops_polling():
    transport = ScriptedTransport(RUNNING)
    controller = PollController(interval=10, max_ticks=30)

    async def scenario():
        cancel_event = asyncio.Event()
        asyncio.get_running_loop().call_later(0.05, cancel_event.set)
        with pytest.raises(CancelledError):
            await controller.wait(transport, HANDLE, cancel_event=cancel_event)
        calls = transport.calls
        await asyncio.sleep(0.05)
        return calls

    calls = asyncio.run(scenario())
    assert calls == 1
    assert transport.calls == 1


def test_cancel_before_first_poll():
    transport = ScriptedTransport(SUCCEEDED)
    controller = PollController(interval=0)

    async def scenario():
        cancel_event = asyncio.Event()
        cancel_event.set()
        with pytest.raises(CancelledError):
            await controller.wait(transport, HANDLE, cancel_event=cancel_event)

    asyncio.run(scenario())
    assert transport.calls == 0


def test_task_cancellation_propagates():
    transport = ScriptedTransport(RUNNING)
    controller = PollController(interval=10, max_ticks=30)
    states = []

    async def scenario():
        task = asyncio.create_task(
            controller.wait(transport, HANDLE, on_progress=lambda p: states.append(p.state))
        )
        await asyncio.sleep(0.05)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    asyncio.run(scenario())
    assert transport.calls == 1
    assert states[-1] == "cancelled"


def test_progress_reports_real_ticks():
    transport = ScriptedTransport(RUNNING, RUNNING, SUCCEEDED)
    progress = []
    _wait(transport, on_progress=progress.append)
    assert [(p.state, p.tick) for p in progress] == [
        ("submitted", 0),
        ("polling", 1),
        ("polling", 2),
        ("succeeded", 3),
    ]
    assert progress[1].fraction == pytest.approx(1 / 30)
    assert progress[-1].fraction == 1.0


def test_timeout_progress():
    progress = []
    with pytest.raises(TimedOutError):
        _wait(ScriptedTransport(RUNNING), max_ticks=2, on_progress=progress.append)
    assert progress[-1].state == "timed_out"
    assert progress[-1].tick == 2


def test_classify():
    assert classify(RawOperationResult(status="running")).kind == "running"
    assert classify(RawOperationResult(status="succeeded")).kind == "succeeded"
    assert classify(RawOperationResult(status="failed")).kind == "failed"


@pytest.mark.parametrize(("interval", "max_ticks"), [(-1, 30), (1, 0)])
def test_invalid_controller_settings(interval, max_ticks):
    with pytest.raises(ValueError):
        PollController(interval=interval, max_ticks=max_ticks)


def test_malformed_result_is_not_retried():
    states = []
    transport = ScriptedTransport(RUNNING, MalformedResultError("unreadable result", status="succeeded"), SUCCEEDED)
    with pytest.raises(MalformedResultError):
        _wait(transport, on_progress=lambda progress: states.append(progress.state))
    assert transport.calls == 2
    assert states[-1] == "failed"
