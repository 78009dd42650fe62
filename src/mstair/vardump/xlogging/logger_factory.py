# File: src/mstair/vardump/xlogging/logger_factory.py
"""
Logger factory for vardump modules.

Every module logs through a `DumpLogger` obtained with ``create_logger(__name__)``.
Loggers join the standard logging hierarchy, so handlers attached by the host
application (or pytest's caplog) receive their records; vardump itself never
attaches handlers. Levels come from VARDUMP_LOG_LEVEL* variables, see
`mstair.vardump.xlogging.logger_levels`.
"""

from __future__ import annotations

import logging
from typing import Any

from mstair.vardump.xlogging.logger_constants import TRACE, initialize_logger_constants
from mstair.vardump.xlogging.logger_levels import LogLevelConfig


__all__ = [
    "DumpLogger",
    "create_logger",
]


class DumpLogger(logging.Logger):
    """
    logging.Logger with a TRACE level and an environment-derived initial level.

    Loggers left unconfigured stay at NOTSET and inherit from their parent.
    """

    def __init__(self, name: str, level: int = logging.NOTSET) -> None:
        initialize_logger_constants()
        if level == logging.NOTSET:
            level = LogLevelConfig.get_instance().get_effective_level(name) or logging.NOTSET
        super().__init__(name, level)

    def __repr__(self) -> str:
        level = self.getEffectiveLevel()
        return f"<{type(self).__name__} '{self.name}' {logging.getLevelName(level)}={level}>"

    def trace(self, msg: object, *args: Any, **kwargs: Any) -> None:
        """Log a message at TRACE level (below DEBUG)."""
        if self.isEnabledFor(TRACE):
            kwargs.setdefault("stacklevel", 1)
            kwargs["stacklevel"] += 1
            self._log(TRACE, msg, args, **kwargs)


def create_logger(name: str, *, level: int | str | None = None) -> DumpLogger:
    """
    Return the DumpLogger called `name`, creating it on first use.

    :param name: Logger name, normally ``__name__``.
    :param level: Explicit level; overrides the environment.
    :raises TypeError: If a logger of another class already owns `name`.
    """
    logger = _get_dump_logger_from_logging(name)
    if level is not None:
        logger.setLevel(level)
    return logger


def _get_dump_logger_from_logging(name: str) -> DumpLogger:
    """
    Create or retrieve a DumpLogger through logging.getLogger().

    The logger class is swapped only for the duration of the call, so parent
    links and propagation are set up by the logging manager as usual.
    """
    logging_class = logging.getLoggerClass()
    if logging_class is not DumpLogger:
        logging.setLoggerClass(DumpLogger)
    try:
        logger = logging.getLogger(name)
    finally:
        if logging_class is not DumpLogger:
            logging.setLoggerClass(logging_class)
    if not isinstance(logger, DumpLogger):
        raise TypeError(f"Logger {name!r} already exists as {type(logger).__name__}")
    return logger


# End of file: src/mstair/vardump/xlogging/logger_factory.py
