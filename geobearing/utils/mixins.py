"""Utility mixin classes"""

__all__ = ['LoggingMixin']

import logging
from typing import Optional


class LoggingMixin:  # pylint: disable=too-few-public-methods
    """
    Mixin class for logging. Provides a logger named after the implementing class,
    nested under the package logger, and a tally of rejected sensor inputs.
    """
    logger: logging.Logger
    rejected: int

    WARNED_ONCE: set = set()

    def __init__(self, logstr: Optional[str] = None):
        _class = self.__class__
        module_name = _class.__module__
        classname = _class.__name__
        if logstr:
            classname += f'.{logstr}'

        logstr = f"{classname}" if module_name == "builtins" else f"{module_name}.{classname}"

        self.logger = logging.getLogger(logstr)
        self.rejected = 0

    @classmethod
    def _set_warned_once(cls, msg):
        """Appends message to classvar"""
        cls.WARNED_ONCE.add(msg)

    def warn_once(self, msg, *args, **kwargs):
        """Logs a warning only once per message"""
        if msg in self.WARNED_ONCE:
            return

        self.logger.warning(msg, *args, **kwargs)
        self._set_warned_once(msg)

    def reject(self, msg, *args):
        """Counts an ignored input and logs the reason at debug level"""
        self.rejected += 1
        self.logger.debug(msg, *args)
