"""Logging for the system view service.

The log file always receives JSON lines. The console gets JSON or plain
text. The engine logger (``sysview.view``) logs every batch at DEBUG and
can be tuned apart from the rest of the service.
"""

import json
import logging
import logging.config
import logging.handlers
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .config import DEFAULT_LOG_PATH

ENGINE_LOGGER = "sysview.view"
TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
CONSOLE_FORMATS = ("json", "text")


class JSONFormatter(logging.Formatter):
    """One JSON object per record; ``extra={"context": ...}`` is kept."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        context = getattr(record, "context", None)
        if context is not None:
            log_data["context"] = context

        return json.dumps(log_data, default=str)


def build_logging_config(
    log_level: str = "INFO",
    log_file: str | Path = DEFAULT_LOG_PATH,
    console_format: str = "json",
    engine_log_level: str | None = None,
) -> dict[str, Any]:
    """
    Build the dictConfig for the service.

    Args:
        log_level: Root level.
        log_file: JSON log file, rotated at 10 MB.
        console_format: "json" or "text".
        engine_log_level: Level of the engine logger; root level if None.

    Returns:
        Mapping accepted by logging.config.dictConfig.
    """
    if console_format not in CONSOLE_FORMATS:
        raise ValueError(f"Unknown console format: {console_format}")

    config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {"()": "sysview.logging_config.JSONFormatter"},
            "text": {"format": TEXT_FORMAT},
        },
        "handlers": {
            "file": {
                "class": "logging.handlers.RotatingFileHandler",
                "filename": str(log_file),
                "maxBytes": 10 * 1024 * 1024,
                "backupCount": 5,
                "formatter": "json",
                "encoding": "utf-8",
            },
            "console": {
                "class": "logging.StreamHandler",
                "formatter": console_format,
                "stream": "ext://sys.stdout",
            },
        },
        "root": {"level": log_level.upper(), "handlers": ["file", "console"]},
        "loggers": {},
    }
    if engine_log_level:
        config["loggers"][ENGINE_LOGGER] = {"level": engine_log_level.upper()}
    return config


def setup_logging(
    log_level: str = "INFO",
    log_file: str | Path | None = None,
    console_format: str = "json",
    engine_log_level: str | None = None,
) -> None:
    """Configure logging for the service; see build_logging_config."""
    log_path = Path(log_file) if log_file is not None else DEFAULT_LOG_PATH
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(
        build_logging_config(log_level, log_path, console_format, engine_log_level)
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
