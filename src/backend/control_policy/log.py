from __future__ import annotations

import logging
from typing import Optional

from .errors import InvalidValueError

LOGGER_NAME = "control_policy"

_LEVELS = {
    "NONE": logging.CRITICAL + 10,
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    # Finer than DEBUG in some policy files; treated as DEBUG.
    "FINE": logging.DEBUG,
}


def parse_log_level(level: str) -> int:
    try:
        return _LEVELS[level.strip().upper()]
    except KeyError:
        raise InvalidValueError("log-level", f"one of {', '.join(sorted(_LEVELS))}", level) from None


def apply_log_level(level: Optional[str], logger_name: str = LOGGER_NAME) -> Optional[int]:
    """Set the package logger to a policy's ``log-level``; None leaves it untouched."""
    if level is None:
        return None
    numeric = parse_log_level(level)
    logging.getLogger(logger_name).setLevel(numeric)
    return numeric
