"""
Logging configuration for Mindtrace.

Every module logs through the ``mindtrace`` logger hierarchy. Console
records go to stderr (coloured only when stderr is a terminal) so CLI
output on stdout stays clean; file records are plain text.
"""

from __future__ import annotations

import logging
import sys
import time
from pathlib import Path
from typing import Literal

ROOT_LOGGER_NAME = "mindtrace"

_loggers: dict[str, logging.Logger] = {}


# ============================================================================
# Formatter
# ============================================================================


class MindtraceFormatter(logging.Formatter):
    """``[time] LEVEL [module] message`` with the root prefix stripped."""

    LEVEL_COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    converter = time.gmtime

    def __init__(self, use_colors: bool = False, include_timestamp: bool = True):
        super().__init__(datefmt="%Y-%m-%d %H:%M:%S")
        self.use_colors = use_colors
        self.include_timestamp = include_timestamp

    def format(self, record: logging.LogRecord) -> str:
        level = f"{record.levelname:8}"
        if self.use_colors and record.levelname in self.LEVEL_COLORS:
            level = f"{self.LEVEL_COLORS[record.levelname]}{level}{self.RESET}"

        name = record.name.removeprefix(f"{ROOT_LOGGER_NAME}.")
        line = f"{level} [{name:18}] {record.getMessage()}"
        if self.include_timestamp:
            line = f"[{self.formatTime(record)}] {line}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


# ============================================================================
# Setup
# ============================================================================


def _resolve_level(level: str) -> int:
    numeric = logging.getLevelNamesMapping().get(level.upper())
    if numeric is None:
        raise ValueError(f"Unknown log level: {level!r}")
    return numeric


def setup_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO",
    log_dir: str | Path | None = None,
    console_output: bool = True,
    file_output: bool = True,
    log_filename: str = "mindtrace.log",
) -> None:
    """Configure the ``mindtrace`` logger, replacing any earlier handlers.

    Args:
        level: Minimum log level to capture
        log_dir: Directory for log files (file logging is skipped when None)
        console_output: Whether to log to stderr
        file_output: Whether to log to a file in ``log_dir``
        log_filename: Name of the log file

    Raises:
        ValueError: If ``level`` is not a logging level name
    """
    numeric = _resolve_level(level)
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(numeric)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    if console_output:
        stream = sys.stderr
        console_handler = logging.StreamHandler(stream)
        console_handler.setFormatter(MindtraceFormatter(use_colors=stream.isatty()))
        root_logger.addHandler(console_handler)

    if file_output and log_dir is not None:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path / log_filename, encoding="utf-8")
        file_handler.setFormatter(MindtraceFormatter())
        root_logger.addHandler(file_handler)

    root_logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get or create a logger under the ``mindtrace`` hierarchy.

    Usage:
        logger = get_logger("graph.builder")
        logger.warning("Dropping dangling branch reference")
    """
    full_name = name if name.startswith(f"{ROOT_LOGGER_NAME}.") else f"{ROOT_LOGGER_NAME}.{name}"
    if full_name not in _loggers:
        _loggers[full_name] = logging.getLogger(full_name)
    return _loggers[full_name]


def log_operation(
    logger: logging.Logger,
    operation: str,
    details: dict | None = None,
    level: int = logging.DEBUG,
) -> None:
    """Log an operation with optional ``key=value`` details."""
    if details:
        detail_str = ", ".join(f"{k}={v}" for k, v in details.items())
        logger.log(level, f"{operation}: {detail_str}")
    else:
        logger.log(level, operation)


# Console-only default so library imports log somewhere sensible
setup_logging(level="WARNING", console_output=True, file_output=False)
