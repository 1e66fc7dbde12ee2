"""In-memory cache owned by a single controller.

Entries never expire and the store is unbounded: the cache lives exactly
as long as the controller that created it. Access is synchronous, from
the event loop thread only.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, Hashable, TypeVar, Union

from ...ports.cache import ABSENT, _Absent

T = TypeVar("T")


@dataclass
class InMemoryCache(Generic[T]):
    """Keyed in-memory store.

    This cache implements the CachePort protocol.

    Attributes:
        name: Cache name for logging

    Example:
        cache = InMemoryCache[dict](name="features")
        cache.set("stations", records)
        cache.get("unknown")  # -> ABSENT
    """

    name: str = "cache"

    _store: Dict[Hashable, Any] = field(default_factory=dict, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    # Statistics
    _hits: int = field(default=0, repr=False)
    _misses: int = field(default=0, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(f"{__name__}.{self.name}")

    def get(self, key: Hashable) -> Union[T, _Absent]:
        """Get a value from the cache.

        Args:
            key: The cache key.

        Returns:
            The cached value, or ABSENT if the key was never set.
        """
        if key not in self._store:
            self._misses += 1
            return ABSENT
        self._hits += 1
        return self._store[key]

    def set(self, key: Hashable, value: T) -> None:
        """Set a value in the cache, replacing any previous value.

        Args:
            key: The cache key.
            value: The value to cache.
        """
        replaced = key in self._store
        self._store[key] = value
        self._logger.debug(
            "Cache entry set",
            extra={"key": repr(key), "replaced": replaced},
        )

    def get_or_compute(self, key: Hashable, compute_fn: Callable[[], T]) -> T:
        """Get from cache or compute and cache the value.

        Args:
            key: The cache key.
            compute_fn: Function to compute the value if not cached.

        Returns:
            The cached or computed value.
        """
        value = self.get(key)
        if value is not ABSENT:
            return value  # type: ignore[return-value]

        self._logger.debug("Cache miss, computing", extra={"key": repr(key)})
        computed = compute_fn()
        self.set(key, computed)
        return computed

    def clear(self) -> int:
        """Clear all entries from the cache.

        Returns:
            Number of entries that were cleared.
        """
        count = len(self._store)
        self._store.clear()
        self._hits = 0
        self._misses = 0
        self._logger.info("Cache cleared", extra={"entries_cleared": count})
        return count

    def invalidate(self, key: Hashable) -> bool:
        """Invalidate a specific cache entry.

        Returns:
            True if the key existed and was removed.
        """
        if key in self._store:
            del self._store[key]
            self._logger.debug("Cache entry invalidated", extra={"key": repr(key)})
            return True
        return False

    def size(self) -> int:
        """Return the number of entries in the cache."""
        return len(self._store)

    def stats(self) -> Dict[str, Any]:
        """Return cache statistics.

        Returns:
            Dictionary with hit/miss counts and size.
        """
        total = self._hits + self._misses
        hit_rate = (self._hits / total * 100) if total > 0 else 0.0
        return {
            "size": len(self._store),
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate_percent": round(hit_rate, 1),
        }

    def keys(self) -> list[Hashable]:
        """Return all keys in the cache."""
        return list(self._store.keys())
