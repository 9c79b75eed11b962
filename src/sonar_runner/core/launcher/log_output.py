from __future__ import annotations

"""
Engine Log Sinks.

The analysis engine reports its progress through a single-method sink
receiving an already formatted message and a severity level. Two sinks are
provided: one printing to standard output, one bridging into the runner's
logging configuration.
"""

import logging
import sys
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Optional, TextIO


class LogLevel(Enum):
    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


_PY_LEVELS: Dict[LogLevel, int] = {
    LogLevel.TRACE: logging.DEBUG,
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


class LogOutput(ABC):
    """
    Receiver of the engine's log messages.
    """

    @abstractmethod
    def log(self, formatted_message: str, level: LogLevel) -> None:
        """
        Handle one message.

        Args:
            formatted_message: Message ready for display.
            level: Severity of the message.
        """
        pass


class StdOutLogOutput(LogOutput):
    """Writes 'LEVEL: message' lines to standard output."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream

    def log(self, formatted_message: str, level: LogLevel) -> None:
        # Resolved per call so that a redirected sys.stdout is honored
        stream = self._stream or sys.stdout
        stream.write(f"{level.name}: {formatted_message}\n")


class LoggerLogOutput(LogOutput):
    """Forwards engine messages to a standard library logger."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or logging.getLogger("sonar_runner.engine")

    def log(self, formatted_message: str, level: LogLevel) -> None:
        self._logger.log(_PY_LEVELS.get(level, logging.INFO), formatted_message)
