"""Structured logging configuration.

Provides:
- JSON structured log lines for production
- Plain console output for local development
- Optional error/combined log files
- Request logging middleware

Usage:
    from me_api.logging_config import setup_logging

    # At app startup
    setup_logging(level="INFO", json_format=True, log_dir="logs")

    # In modules
    logger = logging.getLogger(__name__)
    logger.info("Message", extra={"skill_id": 3})
"""

import json
import logging
import sys
import time
import traceback
from datetime import datetime, timezone
from pathlib import Path

from fastapi import FastAPI, Request

ROOT_LOGGER_NAME = "me_api"

# Attributes present on every LogRecord; anything else came in through `extra`
_RESERVED_ATTRS = frozenset(
    (
        "name", "msg", "args", "created", "filename", "funcName", "levelname",
        "levelno", "lineno", "module", "msecs", "pathname", "process",
        "processName", "relativeCreated", "stack_info", "exc_info", "exc_text",
        "thread", "threadName", "message", "taskName",
    )
)


class JSONFormatter(logging.Formatter):
    """JSON structured log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                log_entry[key] = value

        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": traceback.format_exception(*record.exc_info),
            }

        return json.dumps(log_entry, default=str)


def setup_logging(
    level: str = "INFO",
    json_format: bool = True,
    log_dir: str | None = None,
) -> logging.Logger:
    """Configure the ``me_api`` logger tree.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Emit JSON lines instead of plain text
        log_dir: Directory for ``error.log`` and ``combined.log``; no files
            are written when None

    Returns:
        The configured package logger
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(log_level)

    # Remove handlers from a previous call
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    if json_format:
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s")

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_dir:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)

        error_handler = logging.FileHandler(path / "error.log", encoding="utf-8")
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(JSONFormatter())
        logger.addHandler(error_handler)

        combined_handler = logging.FileHandler(path / "combined.log", encoding="utf-8")
        combined_handler.setFormatter(JSONFormatter())
        logger.addHandler(combined_handler)

    logger.debug(
        "Logging configured",
        extra={"format": "json" if json_format else "plain", "log_level": level},
    )
    return logger


def setup_request_logging(app: FastAPI) -> None:
    """Log every request with client info, status code and duration."""
    logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.requests")

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            # An exception escaping call_next is logged as a 500
            logger.info(
                f"{request.method} {request.url.path}",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "ip": request.client.host if request.client else None,
                    "user_agent": request.headers.get("user-agent"),
                    "status_code": status_code,
                    "duration_ms": round((time.perf_counter() - start) * 1000, 2),
                },
            )
