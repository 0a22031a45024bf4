from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from app.api.deps import get_preview_service
from app.schemas.preview import ErrorResponse, PreviewData
from app.services.preview import PreviewService

router = APIRouter(prefix="/preview", tags=["previews"])


@router.get(
    "",
    response_model=PreviewData,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
)
async def get_preview(
    service: Annotated[PreviewService, Depends(get_preview_service)],
    url: Annotated[Optional[str], Query()] = None,
) -> PreviewData | JSONResponse:
    """Return link-preview metadata for ``url``.

    Always 200 once ``url`` is given, even if nothing could be extracted.
    """
    if not url:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "URL parameter is required"},
        )
    return await service.get_preview(url)
