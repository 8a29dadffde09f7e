"""
Logging for the noun catalog.

Everything logs under the "nouns" logger. Console output goes to stderr so
that exports piped from the CLI stay clean; a timestamped log file is added
when a log directory is configured (see NounsConfig.configure_logging).

Catalog context travels as record fields rather than in the message text:

    log_operation(logger, "Loaded catalog", category="finance", path=path)
    # INFO     [catalog.loader] Loaded catalog (category=finance, path=...)
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import IO, Any, Literal

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

ROOT_LOGGER = "nouns"
LOG_FILENAME = "nouns.log"

# Record attributes rendered after the message when set through `extra`.
CONTEXT_FIELDS = ("category", "noun", "path")


# ============================================================================
# Formatter
# ============================================================================


class NounsFormatter(logging.Formatter):
    """One line per record: level, short logger name, message, catalog context."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = False, with_time: bool = False):
        super().__init__(datefmt="%Y-%m-%d %H:%M:%S")
        self.use_colors = use_colors
        self.with_time = with_time

    def format(self, record: logging.LogRecord) -> str:
        level = f"{record.levelname:8}"
        if self.use_colors and record.levelname in self.COLORS:
            level = f"{self.COLORS[record.levelname]}{level}{self.RESET}"

        name = record.name.removeprefix(f"{ROOT_LOGGER}.")
        line = f"{level} [{name}] {record.getMessage()}"

        context = [
            f"{key}={getattr(record, key)}"
            for key in CONTEXT_FIELDS
            if getattr(record, key, None) is not None
        ]
        if context:
            line = f"{line} ({', '.join(context)})"
        if self.with_time:
            line = f"[{self.formatTime(record, self.datefmt)}] {line}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


# ============================================================================
# Setup
# ============================================================================


def setup_logging(
    level: LogLevel = "WARNING",
    log_dir: str | Path | None = None,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Configure the "nouns" logger, replacing any earlier configuration.

    Args:
        level: Minimum level for every handler
        log_dir: Directory for nouns.log; no file logging when None
        stream: Console stream, stderr by default

    Returns:
        The package root logger
    """
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(getattr(logging, level))

    for handler in list(root.handlers):
        root.removeHandler(handler)
        if isinstance(handler, logging.FileHandler):
            handler.close()

    stream = stream or sys.stderr
    console = logging.StreamHandler(stream)
    console.setFormatter(NounsFormatter(use_colors=stream.isatty()))
    root.addHandler(console)

    if log_dir is not None:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path / LOG_FILENAME, encoding="utf-8")
        file_handler.setFormatter(NounsFormatter(with_time=True))
        root.addHandler(file_handler)

    root.propagate = False
    return root


def get_logger(name: str) -> logging.Logger:
    """Logger under the "nouns." namespace, e.g. get_logger("catalog.loader")."""
    if name == ROOT_LOGGER or name.startswith(f"{ROOT_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


# ============================================================================
# Helpers
# ============================================================================


def _split_details(details: dict[str, Any]) -> tuple[str, dict[str, Any]]:
    extra = {key: details.pop(key) for key in CONTEXT_FIELDS if key in details}
    text = ", ".join(f"{k}={v}" for k, v in details.items() if v is not None)
    return text, extra


def log_operation(logger: logging.Logger, operation: str, **details: Any) -> None:
    """Log a completed operation at INFO.

    `category`, `noun` and `path` become record fields; other details are
    appended to the message as key=value pairs (None values are dropped).
    """
    text, extra = _split_details(details)
    logger.info(f"{operation}: {text}" if text else operation, extra=extra)


def log_error(logger: logging.Logger, operation: str, error: Exception, **details: Any) -> None:
    """Log a failed operation at ERROR; the traceback is kept for DEBUG runs."""
    text, extra = _split_details(details)
    message = f"{operation} failed: {type(error).__name__}: {error}"
    if text:
        message = f"{message} | {text}"
    logger.error(message, extra=extra, exc_info=logger.isEnabledFor(logging.DEBUG))


# Console-only default so imports can log before the CLI configures logging.
setup_logging()
