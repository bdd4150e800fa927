"""Logging infrastructure for oradew-tasks.

Provides the Logger interface that components receive by injection, so the
same code can print to a rich console or be silenced in tests.
"""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod


class LogLevel(enum.Enum):
    """Log verbosity levels for oradew-tasks diagnostic messages.

    Lower numeric values represent higher severity / less verbosity.
    """
    FATAL = 0  # Only unrecoverable errors (bad configuration, spawn failures)
    ERROR = 1  # Fatal errors plus task enumeration failures
    WARN = 2   # Errors plus warnings about configuration issues
    INFO = 3   # Warnings plus executed commands (default)
    DEBUG = 4  # Info plus resolved paths and environment details
    TRACE = 5  # Debug plus fine-grained tracing


class Logger(ABC):
    """Leveled logger interface.

    Implementations decide where messages go; callers only pick a level.
    """

    @abstractmethod
    def log(self, level: LogLevel = LogLevel.INFO, *args, **kwargs) -> None:
        """Log a message at the given level."""
        ...

    @abstractmethod
    def push_level(self, level: LogLevel) -> None:
        """Temporarily switch to a new log level."""
        ...

    @abstractmethod
    def pop_level(self) -> LogLevel:
        """Return to the previous log level."""
        ...

    def fatal(self, *args, **kwargs) -> None:
        self.log(LogLevel.FATAL, *args, **kwargs)

    def error(self, *args, **kwargs) -> None:
        self.log(LogLevel.ERROR, *args, **kwargs)

    def warn(self, *args, **kwargs) -> None:
        self.log(LogLevel.WARN, *args, **kwargs)

    def info(self, *args, **kwargs) -> None:
        self.log(LogLevel.INFO, *args, **kwargs)

    def debug(self, *args, **kwargs) -> None:
        self.log(LogLevel.DEBUG, *args, **kwargs)

    def trace(self, *args, **kwargs) -> None:
        self.log(LogLevel.TRACE, *args, **kwargs)
