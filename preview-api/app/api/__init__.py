from fastapi import APIRouter

from app.api.v1 import previews

api_router = APIRouter()
api_router.include_router(previews.router)

__all__ = ["api_router"]
