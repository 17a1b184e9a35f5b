"""Logging utility for geobearing"""

__all__ = ['LOGGER', 'set_log_level', 'warn_once']

import logging
from typing import Union

LOGGER = logging.getLogger('geobearing')
LOGGER.setLevel(logging.WARNING)
_LOG_HANDLER = logging.StreamHandler()
_LOG_FORMATTER = logging.Formatter('[%(levelname)s] %(name)s: %(message)s')
_LOG_HANDLER.setFormatter(_LOG_FORMATTER)
LOGGER.addHandler(_LOG_HANDLER)

_WARNINGS = set()


def set_log_level(level: Union[int, str]) -> None:
    """
    Sets the level of the package logger. Per-class loggers (see LoggingMixin)
    are children of this logger and inherit the level.

    Args:
        level:
            A logging level, either as an int (logging.DEBUG) or its name ('DEBUG')
    """
    LOGGER.setLevel(level.upper() if isinstance(level, str) else level)


def warn_once(warning: str):
    if warning not in _WARNINGS:
        LOGGER.warning(warning)
        _WARNINGS.add(warning)
