"""Structured local logging and crash hook setup."""

from __future__ import annotations

import faulthandler
import json
import logging
import logging.handlers
import sys
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .config import config_root

_LOGGER_NAME = "lifecal"
# Attributes every LogRecord has; anything else arrived through ``extra=``.
_RECORD_FIELDS = frozenset(vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))) | {"message", "asctime"}


def log_dir() -> Path:
    path = config_root() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


class JsonFormatter(logging.Formatter):
    """One JSON object per line; ``extra=`` fields are carried as top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts_utc": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RECORD_FIELDS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def configure_logging(
    keep_files: int = 7,
    console: bool = True,
    directory: Path | None = None,
    level: int = logging.INFO,
) -> logging.Logger:
    """Attach the rotating JSON file handler once; later calls are no-ops."""
    logger = logging.getLogger(_LOGGER_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(level)
    base = directory or log_dir()
    base.mkdir(parents=True, exist_ok=True)
    file_handler = logging.handlers.TimedRotatingFileHandler(
        filename=str(base / "lifecal.log"),
        when="midnight",
        backupCount=max(2, keep_files),
        encoding="utf-8",
    )
    file_handler.setFormatter(JsonFormatter())
    logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(console_handler)

    logger.info(
        "logging configured",
        extra={"event": "logging_configured", "log_dir": str(base), "keep_files": max(2, keep_files)},
    )
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME)


def _log_crash(logger: logging.Logger, event: str, exc_info: tuple) -> str:
    crash_id = uuid.uuid4().hex
    logger.critical(f"{event} crash_id={crash_id}", exc_info=exc_info, extra={"event": event, "crash_id": crash_id})
    return crash_id


def install_crash_hooks(directory: Path | None = None) -> None:
    """Route uncaught exceptions (main and worker threads) into the JSON log.

    Hard crashes that bypass Python (segfaults inside Qt) are dumped by
    ``faulthandler`` to ``fault.log`` next to the regular log.
    """
    logger = get_logger()

    def _main_hook(exc_type, exc_value, exc_tb) -> None:
        _log_crash(logger, "uncaught_exception", (exc_type, exc_value, exc_tb))

    def _thread_hook(args: threading.ExceptHookArgs) -> None:
        _log_crash(logger, "thread_exception", (args.exc_type, args.exc_value, args.exc_traceback))

    sys.excepthook = _main_hook
    threading.excepthook = _thread_hook

    fault_path = (directory or log_dir()) / "fault.log"
    faulthandler.enable(file=fault_path.open("a", encoding="utf-8"), all_threads=True)
    logger.info("crash hooks installed", extra={"event": "crash_hooks_installed", "fault_log": str(fault_path)})
