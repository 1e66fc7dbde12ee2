"""Repository port - Where features get their records from."""

from __future__ import annotations

from typing import Any, Mapping, Protocol, Sequence


class RepositoryPort(Protocol):
    """Port for feature data sources.

    Implementations:
    - adapters/repository/json_repository.py (JsonRepository)
    - adapters/repository/static_repository.py (StaticRepository)
    """

    async def fetch(self, source: str) -> Sequence[Mapping[str, Any]]:
        """Return the records published under ``source``.

        Raises:
            KeyError: If the source does not exist.
        """
        ...
