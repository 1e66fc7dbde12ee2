"""Cache adapters - Implementations of the CachePort.

Available implementations:
- InMemoryCache: Unbounded in-memory cache owned by one controller
"""

from .memory_cache import InMemoryCache

__all__ = ["InMemoryCache"]
