import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable

from app.schemas.preview import PreviewData

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    data: PreviewData
    computed_at: float


class PreviewCache:
    """In-memory TTL cache of computed previews, keyed by the exact source URL.

    Freshness is checked on read. Nothing is ever evicted: a stale entry stays
    in memory until the next ``put`` for the same key replaces it.
    """

    def __init__(
        self,
        ttl_seconds: float = 60 * 60,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def is_fresh(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.computed_at < self.ttl_seconds

    def get(self, key: str) -> CacheEntry | None:
        """Return the entry for ``key`` if it exists and has not expired."""
        with self._lock:
            entry = self._entries.get(key)
        if entry is None:
            return None
        if not self.is_fresh(entry):
            logger.debug("preview.cache.stale", extra={"cache_key": key})
            return None
        logger.debug("preview.cache.hit", extra={"cache_key": key})
        return entry

    def put(self, key: str, data: PreviewData) -> CacheEntry:
        entry = CacheEntry(data=data, computed_at=self._clock())
        with self._lock:
            self._entries[key] = entry
        logger.debug(
            "preview.cache.store",
            extra={"cache_key": key, "ttl_seconds": self.ttl_seconds},
        )
        return entry

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
