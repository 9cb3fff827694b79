from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from api.actions import analyze, config, export, health, models
from schemas.responses import ErrorResponse
from services.errors import AnalysisError

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    "configuration": 503,
    "submission": 502,
    "poll_transport": 502,
    "poll_failed": 422,
    "malformed_result": 502,
    "timed_out": 504,
}

app = FastAPI(title="Document Intelligence API")

app.include_router(analyze.router)
app.include_router(models.router)
app.include_router(export.router)
app.include_router(health.router)
app.include_router(config.router)


@app.exception_handler(AnalysisError)
async def analysis_error_handler(request: Request, exc: AnalysisError) -> JSONResponse:
    status_code = STATUS_BY_KIND.get(exc.kind, 500)
    logger.warning("%s %s failed (%s): %s", request.method, request.url.path, exc.kind, exc)
    payload = ErrorResponse.model_validate(exc.to_payload())
    return JSONResponse(status_code=status_code, content=payload.model_dump(mode="json"))
