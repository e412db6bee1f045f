# -*- coding: utf-8 -*-
"""
Logging setup for the finite difference framework.

Every module asks for its logger via get_logger(__name__). Output goes to
stdout with a single formatter; configure_logging() changes level and format
for all loggers handed out so far and for those created later.
"""

import logging
import sys
from typing import Dict, Union


_FORMAT = "%(asctime)s - %(name)-24s - %(levelname)-8s - %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


class FdmLogger:
    """Keeps track of the library loggers and their common settings."""

    _loggers: Dict[str, logging.Logger] = {}
    _log_level = logging.WARNING
    _include_location = False

    @classmethod
    def configure(cls,
                  level: Union[str, int] = "WARNING",
                  include_location: bool = False):
        if isinstance(level, str):
            cls._log_level = getattr(logging, level.upper())
        else:
            cls._log_level = level
        cls._include_location = include_location

        for logger in cls._loggers.values():
            cls._setup_logger(logger)

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        if name not in cls._loggers:
            logger = logging.getLogger(name)
            cls._loggers[name] = logger
            cls._setup_logger(logger)
        return cls._loggers[name]

    @classmethod
    def _setup_logger(cls, logger: logging.Logger):
        logger.handlers.clear()
        logger.setLevel(cls._log_level)

        fmt = _FORMAT
        if cls._include_location:
            fmt += " [%(filename)s:%(lineno)d]"

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(fmt, datefmt=_DATEFMT))
        handler.setLevel(cls._log_level)
        logger.addHandler(handler)
        # records are printed once, by the handler above
        logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    return FdmLogger.get_logger(name)


def configure_logging(**kwargs):
    """
    Keyword Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        include_location: append file:line to each record
    """
    FdmLogger.configure(**kwargs)
