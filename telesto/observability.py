"""Logging setup.

Logs always go to standard error: standard output is reserved for the
JSON result when no output file is given.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .config import ObservabilityConfig, get_config

# Attributes every LogRecord carries; anything else came in via extra=
_RESERVED_LOG_FIELDS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}


class JsonFormatter(logging.Formatter):
    """Format log records as single-line JSON, merging extra fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key.startswith("_") or key in _RESERVED_LOG_FIELDS or key in payload:
                continue
            payload[key] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(
    config: Optional[ObservabilityConfig] = None, level: Optional[str] = None
) -> None:
    """Configure root logging once for the whole process.

    Args:
        config: Logging configuration, defaults to the application config.
        level: Optional level override (e.g. from the command line).
    """
    config = config or get_config().observability
    root = logging.getLogger()

    effective = (level or config.level).upper()
    root.setLevel(getattr(logging, effective, logging.WARNING))

    # Replace default handlers so repeated calls do not duplicate output.
    root.handlers = []
    handler = logging.StreamHandler(sys.stderr)
    if config.structured:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(config.format))
    root.addHandler(handler)
