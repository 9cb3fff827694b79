from __future__ import annotations

import json
from typing import Annotated, Optional

from fastapi import APIRouter, File, Form, HTTPException, UploadFile
from pydantic import ValidationError

from core.config import get_settings
from schemas.requests import AnalysisRequest, AnalyzeOptions
from schemas.responses import AnalysisRunResult, ErrorResponse
from services.analyzer import run_analysis
from services.io import is_supported_document

router = APIRouter()


@router.post(
    "/analyze",
    response_model=AnalysisRunResult,
    tags=["Analysis"],
    responses={
        422: {"model": ErrorResponse, "description": "The service failed the analysis"},
        502: {"model": ErrorResponse, "description": "The service rejected the submission"},
        503: {"model": ErrorResponse, "description": "Endpoint or API key not configured"},
        504: {"model": ErrorResponse, "description": "Polling budget exhausted"},
    },
)
async def analyze_document(
    file: Annotated[UploadFile, File()],
    model: Annotated[Optional[str], Form()] = None,
    options: Annotated[Optional[str], Form()] = None,
):
    """
    Analyze an uploaded document.

    Args:
        file: PDF or image to analyze.
        model: Logical model name (invoice, receipt, form, ...).
        options: JSON string of AnalyzeOptions.
    """
    if not is_supported_document(file.filename, file.content_type):
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type: {file.content_type or file.filename}",
        )

    content = await file.read()
    try:
        request = AnalysisRequest(
            file_bytes=content,
            model_selector=model or get_settings().default_model,
            filename=file.filename,
        )
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=f"Invalid input: {e}")

    options_obj = AnalyzeOptions()
    if options:
        try:
            options_obj = AnalyzeOptions.model_validate(json.loads(options))
        except json.JSONDecodeError as e:
            raise HTTPException(status_code=400, detail=f"Invalid options JSON: {e}")
        except ValidationError as e:
            raise HTTPException(status_code=422, detail=f"Invalid options: {e}")

    return await run_analysis(request, options_obj)
