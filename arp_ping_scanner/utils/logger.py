"""
Logging system with colored output for host scanning operations.

This module provides a Logger class that supports colored console output
using colorama, different log levels with distinct colors and fixed-width
table helpers used by the console reporter.
"""

import sys
import threading
from datetime import datetime
from enum import Enum
from typing import Optional, List
from colorama import Fore, Style, init

# Initialize colorama for cross-platform colored output
init(autoreset=True)


class LogLevel(Enum):
    """Enumeration for different log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


_LEVEL_ORDER = {
    LogLevel.DEBUG: 0,
    LogLevel.INFO: 1,
    LogLevel.WARNING: 2,
    LogLevel.ERROR: 3,
}


class Logger:
    """
    Logger class with colored console output and progress indicators.

    Probes log from worker threads, so every write goes through a lock to
    keep lines from interleaving.
    """

    LEVEL_COLORS = {
        LogLevel.DEBUG: Fore.CYAN,
        LogLevel.INFO: Fore.GREEN,
        LogLevel.WARNING: Fore.YELLOW,
        LogLevel.ERROR: Fore.RED,
    }

    LEVEL_SYMBOLS = {
        LogLevel.DEBUG: "·",
        LogLevel.INFO: "i",
        LogLevel.WARNING: "!",
        LogLevel.ERROR: "x",
    }

    _write_lock = threading.Lock()

    def __init__(
        self, name: str = "ArpPingScanner", min_level: Optional[LogLevel] = None
    ):
        """
        Initialize the Logger.

        Args:
            name: Name of the logger (default: "ArpPingScanner")
            min_level: Minimum log level to display. When omitted the logger
                follows the global level set with set_log_level().
        """
        self.name = name
        self._min_level = min_level

    @property
    def min_level(self) -> LogLevel:
        if self._min_level is not None:
            return self._min_level
        return _global_level

    @min_level.setter
    def min_level(self, level: LogLevel) -> None:
        self._min_level = level

    def is_enabled_for(self, level: LogLevel) -> bool:
        """Return True if a message at ``level`` would be printed."""
        return _LEVEL_ORDER[level] >= _LEVEL_ORDER[self.min_level]

    def _format_timestamp(self) -> str:
        return datetime.now().strftime("%H:%M:%S")

    def _emit(self, text: str, stream=None) -> None:
        with self._write_lock:
            print(text, file=stream or sys.stdout, flush=True)

    def _log(self, level: LogLevel, message: str, **kwargs) -> None:
        """
        Internal logging method that handles formatting and output.

        Args:
            level: Log level
            message: Message to log
            **kwargs: Additional context rendered as key=value pairs
        """
        if not self.is_enabled_for(level):
            return

        timestamp = self._format_timestamp()
        color = self.LEVEL_COLORS[level]
        symbol = self.LEVEL_SYMBOLS[level]

        formatted_message = (
            f"{Style.DIM}[{timestamp}]{Style.RESET_ALL} "
            f"{color}{symbol} {level.value:<7}{Style.RESET_ALL} "
            f"{message}"
        )

        if kwargs:
            details = " | ".join([f"{k}={v}" for k, v in kwargs.items()])
            formatted_message += f" {Style.DIM}({details}){Style.RESET_ALL}"

        self._emit(
            formatted_message,
            sys.stderr if level == LogLevel.ERROR else sys.stdout,
        )

    def debug(self, message: str, **kwargs) -> None:
        self._log(LogLevel.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs) -> None:
        self._log(LogLevel.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        self._log(LogLevel.WARNING, message, **kwargs)

    def error(
        self, message: str, exception: Optional[Exception] = None, **kwargs
    ) -> None:
        """
        Log an error message.

        Args:
            message: Error message
            exception: Optional exception object for additional context
            **kwargs: Additional context information
        """
        if exception:
            kwargs["exception"] = f"{type(exception).__name__}: {str(exception)}"
        self._log(LogLevel.ERROR, message, **kwargs)

    def success(self, message: str, **kwargs) -> None:
        """Log a success message (formatted as INFO with special styling)."""
        if not self.is_enabled_for(LogLevel.INFO):
            return

        timestamp = self._format_timestamp()
        formatted_message = (
            f"{Style.DIM}[{timestamp}]{Style.RESET_ALL} "
            f"{Fore.GREEN}+ SUCCESS {Style.RESET_ALL} "
            f"{Style.BRIGHT}{message}{Style.RESET_ALL}"
        )

        if kwargs:
            details = " | ".join([f"{k}={v}" for k, v in kwargs.items()])
            formatted_message += f" {Style.DIM}({details}){Style.RESET_ALL}"

        self._emit(formatted_message)

    def banner(self, message: str) -> None:
        """
        Print a plain ``[HH:MM:SS] message`` line.

        Used for the scan start and completion lines, which are part of the
        tool's regular output rather than log records.
        """
        if not self.is_enabled_for(LogLevel.INFO):
            return
        self._emit(f"[{self._format_timestamp()}] {message}")

    def table_header(self, headers: List[str], widths: List[int]) -> None:
        """
        Print a formatted table header.

        Args:
            headers: List of header names
            widths: Column widths; headers past the last width are not padded
        """
        if not self.is_enabled_for(LogLevel.INFO):
            return

        header_row = "\t".join(_pad_cells(headers, widths))
        separator = "\t".join(
            ["-" * max(width, len(header)) for header, width in zip(headers, widths)]
            + ["-" * len(header) for header in headers[len(widths):]]
        )
        self._emit(f"{Style.BRIGHT}{header_row}{Style.RESET_ALL}")
        self._emit(f"{Style.DIM}{separator}{Style.RESET_ALL}")

    def table_row(self, values: List[str], widths: List[int]) -> None:
        """
        Print a formatted table row.

        Args:
            values: List of values to display
            widths: Column widths; values past the last width are not padded
        """
        if not self.is_enabled_for(LogLevel.INFO):
            return

        self._emit("\t".join(_pad_cells(values, widths)))


def _pad_cells(values: List[str], widths: List[int]) -> List[str]:
    cells = [f"{str(value):<{width}}" for value, width in zip(values, widths)]
    return cells + [str(value) for value in values[len(widths):]]


_global_level = LogLevel.INFO

# Global logger instance
logger = Logger()


def set_log_level(level: LogLevel) -> None:
    """
    Set the global log level.

    Loggers created without an explicit ``min_level`` pick it up as well.
    """
    global _global_level
    _global_level = level


def get_logger(name: str = "ArpPingScanner") -> Logger:
    """Get a logger instance with the specified name."""
    return Logger(name)
