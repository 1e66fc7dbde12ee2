"""Logging setup driven by ObservabilityConfig."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .config import ObservabilityConfig, get_config

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Render records as one JSON object per line, including ``extra`` fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, ensure_ascii=False)


def configure_logging(config: Optional[ObservabilityConfig] = None) -> logging.Logger:
    """Configure the ``mapapp`` logger hierarchy.

    Calling this twice replaces the handler installed by the first call.

    Returns:
        The package logger.
    """
    config = config or get_config().observability
    logger = logging.getLogger("mapapp")
    logger.setLevel(config.level.upper())

    for handler in list(logger.handlers):
        if getattr(handler, "_is_mapapp_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler()
    if config.structured:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(config.format))
    setattr(handler, "_is_mapapp_handler", True)
    logger.addHandler(handler)
    return logger
