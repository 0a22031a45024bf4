import asyncio
import logging
from typing import Callable

from app.schemas.preview import PreviewData
from app.services.cache import PreviewCache
from app.services.errors import FetchError
from app.services.fetcher import RemoteFetcher
from app.services.metadata import parse_metadata

logger = logging.getLogger(__name__)


class PreviewService:
    """Cache-gated fetch and parse of link previews.

    ``get_preview`` never raises for remote failures: a page that cannot be
    fetched yields an all-empty ``PreviewData``, which is cached like any other
    result unless ``cache_failures`` is off.

    Concurrent callers missing the cache for the same URL each fetch on their
    own unless ``coalesce_requests`` is on, in which case they await a single
    shared task.
    """

    def __init__(
        self,
        cache: PreviewCache,
        fetcher: RemoteFetcher,
        parser: Callable[[str, str], PreviewData] = parse_metadata,
        cache_failures: bool = True,
        coalesce_requests: bool = False,
    ) -> None:
        self.cache = cache
        self.fetcher = fetcher
        self.parser = parser
        self.cache_failures = cache_failures
        self.coalesce_requests = coalesce_requests
        self._inflight: dict[str, asyncio.Task[PreviewData]] = {}

    async def get_preview(self, source_url: str) -> PreviewData:
        if not source_url:
            raise ValueError("source_url must be a non-empty string")

        entry = self.cache.get(source_url)
        if entry is not None:
            return entry.data

        if not self.coalesce_requests:
            return await self._compute(source_url)

        task = self._inflight.get(source_url)
        if task is None:
            task = asyncio.create_task(self._compute(source_url))
            self._inflight[source_url] = task
            task.add_done_callback(lambda _: self._inflight.pop(source_url, None))
        return await asyncio.shield(task)

    async def _compute(self, source_url: str) -> PreviewData:
        try:
            html = await self.fetcher.fetch(source_url)
        except FetchError as exc:
            logger.warning(
                "preview.fetch.failed",
                extra={"source_url": source_url, "error": str(exc)},
            )
            data = PreviewData.empty()
            if self.cache_failures:
                self.cache.put(source_url, data)
            return data

        data = self.parser(html, source_url)
        self.cache.put(source_url, data)
        return data
