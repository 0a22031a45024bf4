"""Shared pytest fixtures."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_preview_service
from app.main import app
from app.services.cache import PreviewCache
from app.services.errors import FetchError
from app.services.preview import PreviewService


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeFetcher:
    """Stands in for ``RemoteFetcher``; records every URL it is asked for."""

    def __init__(self, pages: dict[str, str | FetchError] | None = None) -> None:
        self.pages = pages or {}
        self.calls: list[str] = []

    async def fetch(self, url: str) -> str:
        self.calls.append(url)
        page = self.pages.get(url, "<html></html>")
        if isinstance(page, FetchError):
            raise page
        return page


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> PreviewCache:
    return PreviewCache(ttl_seconds=3600, clock=clock)


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def service(cache: PreviewCache, fetcher: FakeFetcher) -> PreviewService:
    return PreviewService(cache, fetcher)


@pytest.fixture
def client(service: PreviewService):
    app.dependency_overrides[get_preview_service] = lambda: service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
