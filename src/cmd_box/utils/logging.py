"""Logging setup for cmd-box.

Every module logs under the ``cmd_box`` logger tree. Structured fields
(command name, arguments, stack position) travel on the record as
``context`` and are rendered by both formatters.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

ROOT_LOGGER = "cmd_box"

logger = logging.getLogger(ROOT_LOGGER)


def _record_context(record: logging.LogRecord) -> dict[str, Any]:
    context = getattr(record, "context", None)
    return context if isinstance(context, dict) else {}


class JSONFormatter(logging.Formatter):
    """One JSON object per record, for log files and log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = _record_context(record)
        if context:
            entry["context"] = context
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class ColorFormatter(logging.Formatter):
    """``LEVEL logger: message key=value ...`` with ANSI level colours."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, use_color: bool = True) -> None:
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        level = f"{record.levelname:8}"
        if self.use_color:
            level = f"{self.COLORS.get(record.levelname, '')}{level}{self.RESET}"

        line = f"{level} {record.name}: {record.getMessage()}"
        context = _record_context(record)
        if context:
            line += " " + " ".join(
                f"{key}={_compact(value)}" for key, value in context.items()
            )
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def _compact(value: Any) -> str:
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value, separators=(",", ":"), default=str)
    except ValueError:
        return repr(value)


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    json_format: bool = False,
    use_color: bool = True,
) -> logging.Logger:
    """Configure the ``cmd_box`` logger.

    Console output goes to stderr so it never mixes with command output on
    stdout. A log file, when given, is always written as JSON.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional file to append JSON records to.
        json_format: Write JSON to the console as well.
        use_color: Colour the level names on the console.

    Returns:
        The configured ``cmd_box`` logger.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logger.setLevel(numeric_level)
    logger.handlers.clear()

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(JSONFormatter() if json_format else ColorFormatter(use_color))
    logger.addHandler(console)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(JSONFormatter())
        logger.addHandler(file_handler)

    for handler in logger.handlers:
        handler.setLevel(numeric_level)
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a module logger, e.g. ``get_logger(__name__)``."""
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context: Any,
) -> None:
    """Log ``message`` with structured fields attached as ``record.context``.

    Example:
        log_with_context(logger, logging.DEBUG, "Executed incr",
                         command="incr", args=["x", 2], recorded=True)
    """
    if logger.isEnabledFor(level):
        logger.log(level, message, extra={"context": context}, stacklevel=2)
