from __future__ import annotations

import logging
import sys

"""Labeled stdout logging for the fieldmeta CLI.

Every output line reads `LABEL message` (DEBUG|INFO|WARN|ERROR|SUMMARY), and the
label is repeated on each line of a multi-line message so that no output line
is left unlabeled. The `fieldmeta` logger owns the single stdout handler;
module loggers (`logging.getLogger(__name__)`) propagate to it.
"""

__all__ = [
    "APP_LOGGER_NAME",
    "LabeledFormatter",
    "SUMMARY_LEVEL",
    "get_logger",
    "log_summary",
    "reset_logging",
    "set_log_level",
    "setup_logging",
]

APP_LOGGER_NAME = "fieldmeta"

# between INFO=20 and WARNING=30
SUMMARY_LEVEL = 25

LEVEL_LABELS = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERROR",
    logging.CRITICAL: "CRITICAL",
    SUMMARY_LEVEL: "SUMMARY",
}

_logger: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        label = LEVEL_LABELS.get(record.levelno, record.levelname)
        lines = record.getMessage().splitlines() or [""]
        return "\n".join(f"{label} {line}" for line in lines)


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure the `fieldmeta` logger once and return it.

    Later calls return the same logger untouched; use set_log_level() to change
    the level afterwards.
    """
    global _logger

    if _logger is not None:
        return _logger

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")

    logger = logging.getLogger(APP_LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    # root へ流さない (二重出力防止)
    logger.propagate = False

    _logger = logger
    set_log_level(level)
    return logger


def get_logger() -> logging.Logger:
    if _logger is None:
        return setup_logging()
    return _logger


def set_log_level(level: int) -> None:
    """Apply `level` to the application logger and its handlers (--debug -> DEBUG)."""
    logger = get_logger()
    logger.setLevel(level)
    for h in logger.handlers:
        h.setLevel(level)


def log_summary(message: str) -> None:
    get_logger().log(SUMMARY_LEVEL, message)


def reset_logging() -> None:
    """Drop the configured handler and forget the logger. Mainly for testing purposes."""
    global _logger
    if _logger is not None:
        for handler in _logger.handlers[:]:
            _logger.removeHandler(handler)
    _logger = None
