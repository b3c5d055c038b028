"""Observability: structured JSON logging for scan diagnostics."""

from __future__ import annotations

import json
import logging
import os
from typing import Any

from kics_validator import defaults

_EXTRA_KEYS = (
    "scan_id", "report_path", "status", "exit_code", "duration_ms", "detail", "templates",
)


class JsonFormatter(logging.Formatter):
    """Emit log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        log_dict: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[0] is not None:
            log_dict["exception"] = self.formatException(record.exc_info)
        for key in _EXTRA_KEYS:
            val = getattr(record, key, None)
            if val is not None:
                log_dict[key] = val
        return json.dumps(log_dict, default=str)


def setup_logging(level: str | None = None) -> None:
    """Configure the ``kics_validator`` logger with JSON output.

    Only the package logger is touched; the host owns the root logger.
    """
    level = level or os.environ.get(defaults.ENV_LOG_LEVEL, "INFO")
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    logger = logging.getLogger("kics_validator")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False
