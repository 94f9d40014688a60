"""
Centralized Logging

Architectural Intent:
- One place to configure output for every hearth logger
- Human-readable lines by default, structured JSON for log shippers
- Levels driven by CLI flags (--verbose, --debug) or the config file
"""

import json
import logging
import sys
from datetime import datetime, UTC

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


class JSONFormatter(logging.Formatter):
    """Structured JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def level_from_name(name: str, default: int = logging.WARNING) -> int:
    return LEVELS.get(name.upper(), default) if name else default


def configure_logging(
    level: int = logging.INFO,
    json_format: bool = False,
) -> None:
    """Configure the "hearth" logger hierarchy.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, etc.)
        json_format: If True, emit one JSON object per line.
    """
    root = logging.getLogger("hearth")
    root.setLevel(level)

    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )

    root.addHandler(handler)
