from fastapi import APIRouter
from pydantic import BaseModel

from core.config import get_settings
from docintel import __version__

router = APIRouter()

class HealthResponse(BaseModel):
    status: str
    version: str
    configured: bool
    api_version: str

@router.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check():
    """Report liveness and whether the analysis service is configured."""
    settings = get_settings()
    configured = bool(settings.docintel_endpoint and settings.docintel_api_key)
    return HealthResponse(
        status="ok",
        version=__version__,
        configured=configured,
        api_version=settings.docintel_api_version,
    )
