"""Repository adapters - Implementations of RepositoryPort.

Available implementations:
- JsonRepository: One JSON file per source
- StaticRepository: Records held in memory
"""

from .json_repository import JsonRepository
from .static_repository import StaticRepository

__all__ = ["JsonRepository", "StaticRepository"]
