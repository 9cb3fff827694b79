"""HTTP transport for the Document Intelligence submit/poll protocol."""

from __future__ import annotations

import base64
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from core.config import ServiceConfig
from schemas.internal.operations import OperationHandle
from schemas.internal.raw import RawOperationResult
from schemas.requests import AnalysisRequest
from services.errors import MalformedResultError, PollTransportError, SubmissionError
from services.poller import STATUS_SUCCEEDED

logger = logging.getLogger(__name__)

API_KEY_HEADER = "Ocp-Apim-Subscription-Key"
OPERATION_LOCATION_HEADER = "operation-location"
_MAX_ERROR_BODY = 2000


class DocumentIntelligenceClient:
    """Sends one submit call per analysis and one GET per poll tick.

    The client keeps no per-analysis state. It owns its ``httpx.AsyncClient``
    unless one is injected, in which case the caller closes it.
    """

    def __init__(
        self,
        config: ServiceConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=config.timeout)

    async def __aenter__(self) -> "DocumentIntelligenceClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    def analyze_url(self, model_id: str) -> str:
        base = self.config.endpoint.rstrip("/")
        path = self.config.api_path.strip("/")
        prefix = f"{base}/{path}" if path else base
        return f"{prefix}/documentModels/{model_id}:analyze"

    def _auth_headers(self) -> dict[str, str]:
        return {API_KEY_HEADER: self.config.api_key.get_secret_value()}

    def _encode_body(self, file_bytes: bytes) -> tuple[dict[str, str], dict[str, Any]]:
        headers = {"Content-Type": self.config.content_type}
        if self.config.content_type == "application/json":
            encoded = base64.b64encode(file_bytes).decode("ascii")
            return headers, {"json": {"base64Source": encoded}}
        return headers, {"content": file_bytes}

    async def submit(self, request: AnalysisRequest, model_id: str) -> OperationHandle:
        """POST the document and return the handle from ``operation-location``."""
        url = self.analyze_url(model_id)
        content_headers, body = self._encode_body(request.file_bytes)
        headers = {**self._auth_headers(), **content_headers}
        logger.info(
            "Submitting %s (%d bytes) to model %s",
            request.filename or "document",
            len(request.file_bytes),
            model_id,
        )
        try:
            response = await self._http.post(
                url,
                params={"api-version": self.config.api_version},
                headers=headers,
                **body,
            )
        except httpx.HTTPError as exc:
            raise SubmissionError(f"Submission request failed: {exc}") from exc

        if not response.is_success:
            text = response.text[:_MAX_ERROR_BODY]
            logger.error("Submission rejected with %s: %s", response.status_code, text)
            raise SubmissionError(
                f"Service rejected submission with status {response.status_code}",
                status_code=response.status_code,
                body=text,
            )

        # httpx header lookup is case-insensitive.
        location = response.headers.get(OPERATION_LOCATION_HEADER)
        if not location:
            raise SubmissionError(
                "Service response did not include an operation-location header",
                status_code=response.status_code,
                body=response.text[:_MAX_ERROR_BODY],
            )
        logger.debug("Operation handle: %s", location)
        return OperationHandle(url=location, model_id=model_id)

    async def poll(self, handle: OperationHandle) -> RawOperationResult:
        """GET the operation status once.

        The ``{status, error}`` envelope is read first. A body whose analysis
        payload still fails validation after lenient parsing is retried while
        the operation is running, and raised as :class:`MalformedResultError`
        once the service reports ``succeeded``.
        """
        try:
            response = await self._http.get(handle.url, headers=self._auth_headers())
        except httpx.HTTPError as exc:
            raise PollTransportError(f"Poll request failed: {exc}") from exc

        if not response.is_success:
            raise PollTransportError(
                f"Poll returned status {response.status_code}",
                status_code=response.status_code,
            )
        try:
            body = response.json()
        except ValueError as exc:
            raise PollTransportError(
                f"Poll returned an unreadable body: {exc}",
                status_code=response.status_code,
            ) from exc
        if not isinstance(body, dict) or not isinstance(body.get("status"), str):
            raise PollTransportError(
                "Poll body has no operation status",
                status_code=response.status_code,
            )

        try:
            return RawOperationResult.model_validate(body)
        except ValidationError as exc:
            status = body["status"]
            if status == STATUS_SUCCEEDED:
                logger.error("Unreadable succeeded result: %s", exc)
                raise MalformedResultError(
                    f"Service returned an unreadable result ({exc.error_count()} invalid field(s))",
                    status=status,
                ) from exc
            logger.warning("Ignoring unreadable %s poll body: %s", status, exc)
            return RawOperationResult.model_validate(
                {"status": status, "error": body.get("error")}
                if isinstance(body.get("error"), dict)
                else {"status": status}
            )


__all__ = [
    "API_KEY_HEADER",
    "DocumentIntelligenceClient",
    "OPERATION_LOCATION_HEADER",
]
