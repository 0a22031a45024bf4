from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import FastAPI

from app.api import api_router
from app.config import Settings, settings
from app.log_config import configure_logging
from app.services.cache import PreviewCache
from app.services.fetcher import RemoteFetcher
from app.services.preview import PreviewService


def build_preview_service(
    client: httpx.AsyncClient, app_settings: Settings
) -> PreviewService:
    cache = PreviewCache(ttl_seconds=app_settings.preview_cache_ttl_seconds)
    fetcher = RemoteFetcher(
        client,
        timeout=app_settings.preview_fetch_timeout_seconds,
        user_agent=app_settings.preview_user_agent,
    )
    return PreviewService(
        cache,
        fetcher,
        cache_failures=app_settings.preview_cache_failures,
        coalesce_requests=app_settings.preview_coalesce_requests,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    # Startup
    configure_logging(settings.log_level)
    async with httpx.AsyncClient(
        follow_redirects=settings.preview_follow_redirects
    ) as client:
        app.state.preview_service = build_preview_service(client, settings)
        yield
    # Shutdown: client closed by the context manager


app = FastAPI(title=settings.app_name, lifespan=lifespan)
app.include_router(api_router)


@app.get("/health", tags=["system"])
async def healthcheck() -> dict[str, str]:
    return {"status": "ok", "app": settings.app_name}


def run() -> None:
    """Serve the API with uvicorn."""
    uvicorn.run("app.main:app", host=settings.host, port=settings.port)
