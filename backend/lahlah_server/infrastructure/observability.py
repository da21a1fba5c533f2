"""Structured Logging — JSON formatter and setup for the server and admin scripts.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (error_code, hint, database, ...) surfaced when present
    - JSON format for the server, human-readable text for the admin scripts
"""

import logging
import json
from datetime import datetime, timezone

EXTRA_KEYS = (
    "error_code", "hint", "database", "path", "table_count", "port",
)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_KEYS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application. Safe to call more than once."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    for existing in list(logging.root.handlers):
        if getattr(existing, "_lahlah_handler", False):
            logging.root.removeHandler(existing)
    handler._lahlah_handler = True
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
