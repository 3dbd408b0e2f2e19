# faktory_cli/logging_config.py
"""
Stderr-only JSON logging configuration.

The -l flag picks the root level; stdout is left alone.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

LEVELS = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}
LEVEL_NAMES = {level: name for name, level in LEVELS.items()}


class JsonFormatter(logging.Formatter):
    """
    One JSON object per line.

    Levels are reported with the -l vocabulary (warn, not WARNING). Tracebacks are
    only included at debug level; otherwise the exception is one "error" field.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": LEVEL_NAMES.get(record.levelno, record.levelname.lower()),
            "pid": record.process,
            "logger": record.name,
            "msg": record.getMessage(),
        }

        if record.exc_info:
            exc_type, exc, _tb = record.exc_info
            log_data["error"] = f"{exc_type.__name__}: {exc}"
            if logging.getLogger().isEnabledFor(logging.DEBUG):
                log_data["exc"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def parse_level(name: str) -> int:
    """Map a -l value to a logging level, INFO if unknown."""
    return LEVELS.get(name.lower(), logging.INFO)


def configure_logging(level: str = "info") -> None:
    """
    Configure logging to output JSON to stderr only.

    Clears existing handlers so repeated calls don't duplicate output.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(parse_level(level))
