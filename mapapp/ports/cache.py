"""Cache port - Injectable caching abstraction.

This protocol defines the contract for the controller's key/value cache,
replacing a module-level store shared by every controller with an
instance-owned one.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Hashable, Protocol, TypeVar, Union

T = TypeVar("T")


class _Absent:
    """Marker returned by a cache lookup for a key that was never set."""

    _instance: "_Absent | None" = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = _Absent()


class CachePort(Protocol[T]):
    """Port for caching.

    Implementations:
    - adapters/cache/memory_cache.py (InMemoryCache)

    Lookups of unknown keys return ``ABSENT`` rather than raising, so a
    stored ``None`` stays distinguishable from a miss.
    """

    def get(self, key: Hashable) -> Union[T, _Absent]:
        """Get a value from the cache.

        Args:
            key: The cache key.

        Returns:
            The cached value, or ABSENT if the key was never set.
        """
        ...

    def set(self, key: Hashable, value: T) -> None:
        """Set a value in the cache. The last write for a key wins.

        Args:
            key: The cache key.
            value: The value to cache.
        """
        ...

    def get_or_compute(self, key: Hashable, compute_fn: Callable[[], T]) -> T:
        """Get from cache or compute and cache the value.

        Args:
            key: The cache key.
            compute_fn: Function to compute the value if not cached.

        Returns:
            The cached or computed value.
        """
        ...

    def clear(self) -> int:
        """Clear all entries from the cache.

        Returns:
            Number of entries that were cleared.
        """
        ...

    def invalidate(self, key: Hashable) -> bool:
        """Invalidate a specific cache entry.

        Returns:
            True if the key existed and was removed, False otherwise.
        """
        ...

    def size(self) -> int:
        """Return the number of entries in the cache."""
        ...

    def stats(self) -> Dict[str, Any]:
        """Return hit/miss counters and size."""
        ...
