"""Structured Logging — JSON formatter and setup for matcher observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (matcher_name, method_name, error_code, error) surfaced when present
    - JSON format for CI log collectors, human-readable for local runs
    - The library never calls setup_logging on import; the host opts in

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - setup_logging is idempotent: re-running replaces our handler instead of stacking
"""

import json
import logging
from datetime import datetime, timezone

EXTRA_FIELDS = ("matcher_name", "method_name", "error_code", "error")


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class _MatcherDSLHandler(logging.StreamHandler):
    """Marker subclass so setup_logging can find and replace its own handler."""


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Configure the root logger. Returns the installed handler."""
    for existing in list(logging.root.handlers):
        if isinstance(existing, _MatcherDSLHandler):
            logging.root.removeHandler(existing)
    handler = _MatcherDSLHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
