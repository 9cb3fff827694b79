from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from reporting import get_formatter
from schemas.internal.documents import NormalizedDocument

router = APIRouter()


@router.post("/export/{fmt}", tags=["Export"])
async def export_document(fmt: str, document: NormalizedDocument):
    """Render a normalized document as json, csv, text or markdown."""
    try:
        formatter = get_formatter(fmt)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return Response(
        content=formatter.format(document),
        media_type=formatter.media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{formatter.filename("document")}"'
        },
    )
