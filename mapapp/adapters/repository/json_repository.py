"""JSON file repository.

Each source is a file ``<base_dir>/<source>.json`` holding a list of
record objects. Files are read in a worker thread so loading never blocks
the event loop.
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping, Union


@dataclass
class JsonRepository:
    """Repository reading feature records from JSON files.

    This adapter implements RepositoryPort.

    Attributes:
        base_dir: Directory containing one JSON file per source
    """

    base_dir: Union[str, Path] = "data"

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.base_dir = Path(self.base_dir)
        self._logger = logging.getLogger(__name__)

    def path_for(self, source: str) -> Path:
        return Path(self.base_dir) / f"{source}.json"

    async def fetch(self, source: str) -> List[Mapping[str, Any]]:
        """Read the records of ``source``.

        Raises:
            KeyError: If there is no file for the source.
            ValueError: If the file does not hold a list of objects.
        """
        path = self.path_for(source)
        if not path.is_file():
            raise KeyError(f"Unknown data source: {source}")

        records = await asyncio.to_thread(self._read, path)
        self._logger.debug(
            "Records loaded",
            extra={"source": source, "records": len(records)},
        )
        return records

    @staticmethod
    def _read(path: Path) -> List[Mapping[str, Any]]:
        with path.open(encoding="utf-8") as f:
            payload = json.load(f)
        if not isinstance(payload, list) or not all(
            isinstance(item, dict) for item in payload
        ):
            raise ValueError(f"{path} must contain a JSON list of objects")
        return payload
