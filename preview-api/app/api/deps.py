from fastapi import Request

from app.services.preview import PreviewService


async def get_preview_service(request: Request) -> PreviewService:
    """Return the preview service built at application startup."""
    return request.app.state.preview_service
