"""JSON-lines logging for the client and the demo entry point."""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from logging import Handler, Logger
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Iterator, List, Tuple

LOG_FILE_NAME = "deriv_ta.jsonl"

# LogRecord attributes already carried by the base payload, or noise.
_RESERVED_ATTRS = frozenset(
    {
        "args",
        "msg",
        "levelno",
        "exc_info",
        "exc_text",
        "stack_info",
        "created",
        "msecs",
        "relativeCreated",
    }
)


def _utc_timestamp(created: float) -> str:
    return datetime.fromtimestamp(created, tz=timezone.utc).isoformat().replace("+00:00", "Z")


class JsonFormatter(logging.Formatter):
    """One JSON object per record; ``extra=`` fields land at the top level.

    Values that ``json`` cannot encode (sockets, callbacks) are skipped.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": _utc_timestamp(record.created),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        for key, value in self._extra_fields(record):
            payload.setdefault(key, value)
        return json.dumps(payload, ensure_ascii=False)

    @staticmethod
    def _extra_fields(record: logging.LogRecord) -> Iterator[Tuple[str, Any]]:
        for key, value in record.__dict__.items():
            if key.startswith("_") or key in _RESERVED_ATTRS:
                continue
            try:
                json.dumps(value)
            except (TypeError, ValueError):
                continue
            yield key, value


def _build_handlers(log_file: Path, backup_days: int) -> List[Handler]:
    formatter = JsonFormatter()
    file_handler = TimedRotatingFileHandler(log_file, when="midnight", backupCount=backup_days, encoding="utf-8")
    stream_handler = logging.StreamHandler()
    for handler in (file_handler, stream_handler):
        handler.setFormatter(formatter)
    return [file_handler, stream_handler]


def configure_logging(
    *,
    log_dir: Path,
    level: str = "INFO",
    logger_name: str = "deriv_ta",
    backup_days: int = 14,
) -> Logger:
    """Route ``logger_name`` to ``<log_dir>/deriv_ta.jsonl`` and stderr.

    Calling it again replaces (and closes) the handlers installed earlier, so
    tests and repeated CLI runs do not leak file descriptors.
    """

    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    logger = logging.getLogger(logger_name)
    logger.setLevel(level.upper())
    for stale in list(logger.handlers):
        logger.removeHandler(stale)
        stale.close()
    for handler in _build_handlers(log_file, backup_days):
        logger.addHandler(handler)
    logger.propagate = False

    logger.debug("JSON logging configured", extra={"log_file": str(log_file), "backup_days": backup_days})
    return logger


__all__ = ["configure_logging", "JsonFormatter", "LOG_FILE_NAME"]
