"""Shared logging utilities for scoring observability.

All loggers live under the ``govcon_match`` namespace and write UTC timestamps
to stderr, so CLI output on stdout stays machine-readable.

Usage example:
    from govcon_match.observability.logging import get_logger, set_log_level

    logger = get_logger("govcon_match.match_scoring")
    set_log_level("DEBUG")
    logger.debug("Scored %s opportunities", opportunity_count)
"""

from __future__ import annotations

import logging
import time

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"
_ROOT_NAME = "govcon_match"
_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class UnknownLogLevelError(ValueError):
    """Raised when a log level name is not recognised."""

    def __init__(self, level: str) -> None:
        super().__init__(f"Unknown log level {level!r}; expected one of {', '.join(_LEVELS)}.")


def _build_handler() -> logging.Handler:
    handler = logging.StreamHandler()
    formatter = logging.Formatter(fmt=_LOG_FORMAT, datefmt=_LOG_DATE_FORMAT)
    formatter.converter = time.gmtime
    handler.setFormatter(formatter)
    return handler


def get_logger(name: str) -> logging.Logger:
    """Return a logger configured for UTC timestamps.

    Args:
        name: Logger name (use a stable module-qualified name).

    Returns:
        A logger with a single stream handler. Repeated calls with the same
        name return the same configured instance.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.addHandler(_build_handler())
        logger.setLevel(logging.INFO)
        logger.propagate = False
    return logger


def set_log_level(level: str) -> None:
    """Apply a level to every configured logger in the package namespace."""
    normalised = level.strip().upper()
    if normalised not in _LEVELS:
        raise UnknownLogLevelError(level)
    numeric = logging.getLevelNamesMapping()[normalised]
    for name, candidate in logging.root.manager.loggerDict.items():
        if not isinstance(candidate, logging.Logger):
            continue
        if name == _ROOT_NAME or name.startswith(f"{_ROOT_NAME}."):
            candidate.setLevel(numeric)
