"""
CachingLookup - memoises answers from another lookup.
"""

from formrules.observability.logger import get_logger

from .base_lookup import ExistenceLookup


logger = get_logger(__name__)


class CachingLookup(ExistenceLookup):
    """
    Caches existence answers per (table, column, value).

    Only successful answers are cached. A LookupUnavailableError from the
    wrapped lookup propagates and leaves the cache untouched.
    """

    def __init__(self, inner: ExistenceLookup, max_entries: int = 1024):
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self.inner = inner
        self.max_entries = max_entries
        self._cache: dict[tuple[str, str, str], bool] = {}
        self.hits = 0
        self.misses = 0

    def exists(self, table: str, column: str, value: str) -> bool:
        key = (table, column, value)
        if key in self._cache:
            self.hits += 1
            return self._cache[key]

        self.misses += 1
        answer = self.inner.exists(table, column, value)

        if len(self._cache) >= self.max_entries:
            # Evict the oldest entry (dicts keep insertion order)
            oldest = next(iter(self._cache))
            del self._cache[oldest]
            logger.debug(f"Lookup cache full, evicted {oldest}")

        self._cache[key] = answer
        return answer

    def clear(self) -> None:
        """Drop all cached answers."""
        self._cache.clear()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._cache)

    def __repr__(self) -> str:
        return f"CachingLookup(inner={self.inner!r}, entries={len(self._cache)})"
