"""
Name: Structured Logger Configuration

Responsibilities:
  - Configure JSON-structured logging
  - Format logs for easy parsing (one JSON object per line)
  - Include stack traces for exceptions

Collaborators:
  - Python logging module (stdlib)

Constraints:
  - JSON format for log aggregation compatibility
  - Never log secrets (password hashes, connection strings)

Notes:
  - Import as: from staffing.crosscutting.logger import logger
"""

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from typing import Any


class JSONFormatter(logging.Formatter):
    """
    R: Format logs as JSON.

    Includes:
      - timestamp (ISO 8601)
      - level, logger, module, function, line
      - extra fields from log call
      - exception stack trace (if present)
    """

    # R: Fields that should never be logged (security)
    SENSITIVE_KEYS = {
        "password",
        "passwordhash",
        "password_hash",
        "secret",
        "token",
        "database_url",
    }

    # R: Attributes every LogRecord carries; everything else came from extra=
    INTERNAL_KEYS = {
        "name", "msg", "args", "created", "filename", "funcName",
        "levelname", "levelno", "lineno", "module", "msecs",
        "pathname", "process", "processName", "relativeCreated",
        "stack_info", "exc_info", "exc_text", "thread", "threadName",
        "taskName", "message",
    }

    def format(self, record: logging.LogRecord) -> str:
        log_obj: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for key, value in record.__dict__.items():
            if key in self.INTERNAL_KEYS:
                continue
            if key.lower() in self.SENSITIVE_KEYS:
                continue
            log_obj[key] = value

        if record.exc_info:
            log_obj["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "stacktrace": traceback.format_exception(*record.exc_info),
            }

        return json.dumps(log_obj, default=str, ensure_ascii=False)


def setup_logger(name: str = "staffing", level: str | None = None) -> logging.Logger:
    """
    R: Configure and return structured logger.

    Args:
        name: Logger name (default: "staffing")
        level: Optional level name; defaults to Settings.log_level (INFO)

    Returns:
        Configured logger with JSON formatting
    """
    log = logging.getLogger(name)

    if level is None:
        from .config import get_settings

        try:
            level = get_settings().log_level
        except ValueError:
            # Invalid env is reported when the settings are used for real
            level = "INFO"
    log.setLevel(getattr(logging, (level or "INFO").upper(), logging.INFO))

    # R: Avoid duplicate handlers on reimport
    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
        log.addHandler(handler)

    return log


# R: Global logger instance
logger = setup_logger()
