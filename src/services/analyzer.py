"""Core analysis service for CLI/API reuse."""

from __future__ import annotations

import asyncio
import logging
from time import perf_counter
from typing import Protocol

from core.config import ServiceConfig, Settings, get_settings
from normalization import normalize
from schemas.internal.documents import NormalizedDocument
from schemas.internal.operations import OperationHandle
from schemas.internal.raw import RawOperationResult
from schemas.requests import AnalysisRequest, AnalyzeOptions
from schemas.responses import AnalysisRunResult
from services.errors import CancelledError
from services.poller import PollController, ProgressCallback
from services.transport import DocumentIntelligenceClient

logger = logging.getLogger(__name__)


class AnalysisTransport(Protocol):
    async def submit(self, request: AnalysisRequest, model_id: str) -> OperationHandle: ...

    async def poll(self, handle: OperationHandle) -> RawOperationResult: ...


class DocumentAnalyzer:
    """Submit, poll to completion, and normalize one document per call.

    Instances hold only configuration and a transport, so concurrent
    ``analyze`` calls do not share any per-analysis state.
    """

    def __init__(self, transport: AnalysisTransport, *, settings: Settings | None = None) -> None:
        self.transport = transport
        self.settings = settings or get_settings()

    async def analyze(
        self,
        file_bytes: bytes,
        model_selector: str | None = None,
        *,
        filename: str | None = None,
        options: AnalyzeOptions | None = None,
        cancel_event: asyncio.Event | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> NormalizedDocument:
        selector = model_selector or self.settings.default_model
        request = AnalysisRequest(
            file_bytes=file_bytes, model_selector=selector, filename=filename
        )
        return await self.analyze_request(
            request, options=options, cancel_event=cancel_event, on_progress=on_progress
        )

    async def analyze_request(
        self,
        request: AnalysisRequest,
        *,
        options: AnalyzeOptions | None = None,
        cancel_event: asyncio.Event | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> NormalizedDocument:
        options = options or AnalyzeOptions()
        model_id = self.settings.resolve_model_id(request.model_selector)
        if cancel_event is not None and cancel_event.is_set():
            raise CancelledError()

        selector = request.model_selector
        logger.info("Analyzing with model %s (%s)", selector, model_id)
        handle = await self.transport.submit(request, model_id)

        controller = PollController(
            interval=_pick(options.poll_interval_seconds, self.settings.poll_interval_seconds),
            max_ticks=_pick(options.poll_max_ticks, self.settings.poll_max_ticks),
        )
        result = await controller.wait(
            self.transport, handle, cancel_event=cancel_event, on_progress=on_progress
        )
        return normalize(result, model_selector=selector, model_id=model_id)


async def analyze(
    file_bytes: bytes,
    model_selector: str | None = None,
    *,
    filename: str | None = None,
    settings: Settings | None = None,
    transport: AnalysisTransport | None = None,
    options: AnalyzeOptions | None = None,
    cancel_event: asyncio.Event | None = None,
    on_progress: ProgressCallback | None = None,
) -> NormalizedDocument:
    """Analyze ``file_bytes`` with the model named by ``model_selector``.

    Raises ``SubmissionError``, ``PollFailedError``, ``MalformedResultError``,
    ``TimedOutError`` or ``CancelledError``. Without an explicit ``transport`` a client is built
    from settings and closed before returning.
    """
    settings = settings or get_settings()
    if transport is not None:
        analyzer = DocumentAnalyzer(transport, settings=settings)
        return await analyzer.analyze(
            file_bytes,
            model_selector,
            filename=filename,
            options=options,
            cancel_event=cancel_event,
            on_progress=on_progress,
        )

    async with DocumentIntelligenceClient(ServiceConfig.from_settings(settings)) as client:
        analyzer = DocumentAnalyzer(client, settings=settings)
        return await analyzer.analyze(
            file_bytes,
            model_selector,
            filename=filename,
            options=options,
            cancel_event=cancel_event,
            on_progress=on_progress,
        )


async def run_analysis(
    request: AnalysisRequest,
    options: AnalyzeOptions | None = None,
    *,
    settings: Settings | None = None,
    transport: AnalysisTransport | None = None,
    cancel_event: asyncio.Event | None = None,
    on_progress: ProgressCallback | None = None,
) -> AnalysisRunResult:
    """Run one analysis and wrap the document with run metadata."""
    settings = settings or get_settings()
    start = perf_counter()
    document = await analyze(
        request.file_bytes,
        request.model_selector,
        filename=request.filename,
        settings=settings,
        transport=transport,
        options=options,
        cancel_event=cancel_event,
        on_progress=on_progress,
    )
    runtime_ms = int((perf_counter() - start) * 1000)
    return AnalysisRunResult(
        document=document,
        model_selector=request.model_selector,
        model_id=document.model_id or settings.resolve_model_id(request.model_selector),
        filename=request.filename,
        runtime_ms=runtime_ms,
        warnings=_collect_warnings(document, settings, request.model_selector),
    )


def _collect_warnings(
    document: NormalizedDocument, settings: Settings, model_selector: str
) -> list[str]:
    warnings: list[str] = []
    if model_selector not in settings.model_mapping and not model_selector.startswith("prebuilt-"):
        warnings.append(
            f"Unknown model '{model_selector}'; used {settings.fallback_model_id}."
        )
    if not document.pages:
        warnings.append("The service returned no pages.")
    return warnings


def _pick(override, default):
    return default if override is None else override


__all__ = ["AnalysisTransport", "DocumentAnalyzer", "analyze", "run_analysis"]
