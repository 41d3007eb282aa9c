# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Structured JSON logger for gavbundle.

Every log entry is a single JSON line with a timestamp, level, source module
and message. Subsystems attach context (coordinates, entry paths, exit codes)
through the standard `extra` keyword and it lands as additional JSON fields.

How this works:
  - The package logger ("gavbundle") owns the handlers. It is configured once
    by `configure_logging`, either explicitly during bootstrap or lazily the
    first time a module asks for a logger.
  - Module loggers (`get_logger(__name__)`) carry no handlers of their own and
    propagate to the package logger, so one bootstrap call controls the level
    and destination of every record the bundling pipeline emits.
  - Loggers outside the package hierarchy get their own handlers, which is
    what the tests and ad-hoc scripts rely on.

The JSON structure looks like:
  {"ts": "2026-...", "level": "INFO", "module": "gavbundle.release.deployment.service", "msg": "Adding project", ...}
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER_NAME = "gavbundle"

# LogRecord attributes that are never copied into the JSON payload.
_STANDARD_ATTRS: frozenset[str] = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "relativeCreated",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "pathname",
        "filename",
        "module",
        "levelno",
        "levelname",
        "processName",
        "process",
        "threadName",
        "thread",
        "message",
        "msecs",
        "taskName",
    }
)


class JsonFormatter(logging.Formatter):
    """
    Formats log records as single-line JSON objects.

    Mandatory fields:
      ts     — ISO 8601 UTC timestamp
      level  — log level name
      module — the logger name (usually the Python module path)
      msg    — the formatted message string

    Fields passed through `extra` are merged in. When the record carries
    exception info, the formatted traceback is added under "exc".
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "ts": datetime.now(tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.name,
            "msg": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS and not key.startswith("_"):
                entry[key] = value

        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _resolve_log_level(level_name: str) -> int:
    """Turn a level name string into the corresponding logging constant."""
    upper = level_name.upper()
    if upper not in _VALID_LOG_LEVELS:
        raise ValueError(
            f"Invalid log level '{level_name}'. Must be one of: {', '.join(sorted(_VALID_LOG_LEVELS))}"
        )
    return getattr(logging, upper)


def _attach_handlers(logger: logging.Logger, level: int, log_file: Optional[Path]) -> None:
    formatter = JsonFormatter()

    stdout_handler = logging.StreamHandler(stream=sys.stdout)
    stdout_handler.setLevel(level)
    stdout_handler.setFormatter(formatter)
    logger.addHandler(stdout_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # Don't propagate to the root logger; we handle all output ourselves.
    logger.propagate = False


def configure_logging(log_level: str = "INFO", log_file: Optional[Path] = None) -> logging.Logger:
    """
    (Re)configure the package logger that every module logger propagates to.

    Existing handlers are closed and replaced, so calling this again from a
    later bootstrap switches level and destination cleanly.

    Args:
        log_level: One of DEBUG, INFO, WARNING, ERROR, CRITICAL.
        log_file: Optional path to a log file in addition to stdout.

    Returns:
        The configured package logger.
    """
    level = _resolve_log_level(log_level)
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)

    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    package_logger.setLevel(level)
    _attach_handlers(package_logger, level, log_file)
    return package_logger


def _in_package(name: str) -> bool:
    return name == PACKAGE_LOGGER_NAME or name.startswith(PACKAGE_LOGGER_NAME + ".")


def get_logger(
    name: str,
    log_level: Optional[str] = None,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Create or fetch a structured JSON logger.

    Every module calls this once at the top with `__name__` and keeps the
    returned instance.

    Args:
        name: Logger name, typically __name__ of the calling module.
        log_level: Optional level override for this logger.
        log_file: Optional log file. Only honoured for loggers outside the
                  package hierarchy; package-wide files go through
                  `configure_logging`.

    Returns:
        A logging.Logger that outputs structured JSON.
    """
    logger = logging.getLogger(name)
    if log_level is not None:
        logger.setLevel(_resolve_log_level(log_level))

    if _in_package(name):
        package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
        if not package_logger.handlers:
            configure_logging()
        return logger

    # Avoid stacking handlers if get_logger is called multiple times for the
    # same name (happens in tests).
    if logger.handlers:
        return logger

    level = logger.level if logger.level != logging.NOTSET else logging.INFO
    logger.setLevel(level)
    _attach_handlers(logger, level, log_file)
    return logger
