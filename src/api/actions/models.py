from fastapi import APIRouter

from core.config import get_settings
from schemas.responses import ModelCatalog

router = APIRouter()


@router.get("/models", response_model=ModelCatalog, tags=["Analysis"])
async def list_models():
    """List logical model names and the service models they map to."""
    settings = get_settings()
    return ModelCatalog(
        default_model=settings.default_model,
        fallback_model_id=settings.fallback_model_id,
        models=dict(settings.model_mapping),
    )
