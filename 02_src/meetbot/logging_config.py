"""Structured JSON logging for the scheduling assistant."""

import json
import logging
import logging.config
import os
from datetime import datetime, timezone
from pathlib import Path

from .config import DEFAULT_LOG_PATH

# Third-party loggers that are chatty at INFO.
NOISY_LOGGERS = ("googleapiclient.discovery_cache", "httpx", "httpcore", "anthropic")


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "where": f"{record.module}.{record.funcName}:{record.lineno}",
        }

        user_id = getattr(record, "user_id", None)
        if user_id:
            entry["user_id"] = user_id
        if hasattr(record, "context"):
            entry["context"] = record.context
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def setup_logging(
    log_level: str | None = None,
    log_file: str | None = None,
    to_file: bool = True,
) -> None:
    """
    Configure root logging.

    Args:
        log_level: DEBUG..CRITICAL. Falls back to LOG_LEVEL, then INFO.
        log_file: Rotating log file path. Defaults to 04_logs/app.log.
        to_file: Disable to log to stdout only.
    """
    level = (log_level or os.getenv("LOG_LEVEL", "INFO")).upper()
    handlers: dict[str, dict] = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "json",
            "stream": "ext://sys.stdout",
        },
    }

    if to_file:
        path = Path(log_file or DEFAULT_LOG_PATH)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": str(path),
            "maxBytes": 10 * 1024 * 1024,
            "backupCount": 5,
            "formatter": "json",
            "encoding": "utf-8",
        }

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"json": {"()": "meetbot.logging_config.JSONFormatter"}},
            "handlers": handlers,
            "root": {"level": level, "handlers": list(handlers)},
            "loggers": {
                name: {"level": "WARNING"} for name in NOISY_LOGGERS
            },
        }
    )


def get_logger(name: str) -> logging.Logger:
    """Return the module logger."""
    return logging.getLogger(name)
