"""Structured local logging driven by the ``logging`` section of the settings."""

from __future__ import annotations

import json
import logging
import logging.handlers
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .config import LoggingConfig, config_path


_LOGGER_NAME = "backdrop"


def log_dir() -> Path:
    path = config_path().parent / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


class JsonFormatter(logging.Formatter):
    """One JSON object per line; ``extra={"event": ...}`` is carried through."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts_utc": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        event = getattr(record, "event", None)
        if event is not None:
            payload["event"] = event
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True)


def configure_logging(settings: LoggingConfig | None = None, log_path: Path | None = None) -> logging.Logger:
    """Attach the file (and optional console) handlers once; later calls are no-ops."""
    settings = settings or LoggingConfig()
    logger = get_logger()
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, settings.level.upper(), logging.INFO))
    file_handler = logging.handlers.TimedRotatingFileHandler(
        filename=str(log_path or (log_dir() / "backdrop.log")),
        when="midnight",
        backupCount=max(2, settings.keep_files),
        encoding="utf-8",
    )
    file_handler.setFormatter(JsonFormatter())
    logger.addHandler(file_handler)

    if settings.console:
        console = logging.StreamHandler()
        console.setFormatter(logging.Formatter("%(levelname)s %(name)s %(message)s"))
        logger.addHandler(console)

    logger.debug("logging configured", extra={"event": "logging_configured"})
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME)
