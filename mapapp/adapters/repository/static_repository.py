"""In-memory repository, for embedding data directly and for tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Sequence


@dataclass
class StaticRepository:
    """Repository serving records from a dict of source -> records."""

    sources: Dict[str, Sequence[Mapping[str, Any]]] = field(default_factory=dict)

    async def fetch(self, source: str) -> List[Mapping[str, Any]]:
        try:
            return list(self.sources[source])
        except KeyError:
            raise KeyError(f"Unknown data source: {source}") from None
