# ABOUTME: Time-bounded cache for search results keyed by normalized query text.
# ABOUTME: Entries store the result list with its fetch timestamp and expire after a staleness window.

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


def normalize_query(query: str) -> str:
    """Collapse whitespace and case so equivalent queries share a cache entry"""
    return " ".join(query.split()).casefold()


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    results: tuple[T, ...]
    fetched_at: float


class QueryCache(Generic[T]):
    """
    Explicit search cache: key = (kind, normalized query), value = results + fetch time.

    Expired entries are evicted on lookup of their own key and on every put(),
    so the map never holds more than one window's worth of queries.
    """

    def __init__(self, ttl_seconds: float = 30.0, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[tuple[str, str], CacheEntry[T]] = {}

    def get(self, kind: str, query: str) -> list[T] | None:
        """Fresh cached results, or None on a miss or an expired entry"""
        key = (kind, normalize_query(query))
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._is_stale(entry):
            del self._entries[key]
            return None
        return list(entry.results)

    def put(self, kind: str, query: str, results: list[T]) -> None:
        """Store results for query, evicting every expired entry first"""
        self.prune()
        self._entries[(kind, normalize_query(query))] = CacheEntry(
            results=tuple(results),
            fetched_at=self._clock(),
        )

    def prune(self) -> int:
        """Drop every expired entry and return how many were removed"""
        stale = [key for key, entry in self._entries.items() if self._is_stale(entry)]
        for key in stale:
            del self._entries[key]
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def _is_stale(self, entry: CacheEntry[T]) -> bool:
        return self._clock() - entry.fetched_at >= self.ttl_seconds
