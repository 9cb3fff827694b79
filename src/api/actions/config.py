from typing import Any

from fastapi import APIRouter

from core.config import get_settings

router = APIRouter()

@router.get("/config", response_model=dict[str, Any], tags=["System"])
async def get_configuration():
    """Get current runtime configuration. The API key is masked."""
    return get_settings().model_dump(mode="json")
