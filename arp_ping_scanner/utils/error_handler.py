"""
Error taxonomy and fatal-error reporting for the ARP Ping Scanner.

Errors come in two tiers. Fatal errors (range parsing, address family,
address-count guard, configuration) abort an invocation before any host is
probed and derive from ``ArpPingScannerError``. Contained errors never leave
the host probe: they are recorded as data on the host outcome. ``ProbeError``
is the only exception type a probe backend is expected to raise, and it is
always caught at the host probe boundary.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any, List

from .logger import Logger, get_logger


class ErrorType(Enum):
    """Enumeration for different types of errors."""
    INVALID_RANGE = "invalid_range"
    UNSUPPORTED_FAMILY = "unsupported_family"
    ADDRESS_LIMIT = "address_limit"
    CONFIGURATION_ERROR = "configuration_error"
    PROBE_ERROR = "probe_error"
    FILE_ERROR = "file_error"


class ErrorSeverity(Enum):
    """Enumeration for error severity levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass
class ErrorContext:
    """
    Context information for error handling.

    Attributes:
        error_type: Type of error that occurred
        severity: Severity level of the error
        operation: Operation that was being performed when error occurred
        component: Component/module where error occurred
        additional_info: Additional context information
    """
    error_type: ErrorType
    severity: ErrorSeverity
    operation: str
    component: str
    additional_info: Dict[str, Any] = field(default_factory=dict)


class ArpPingScannerError(Exception):
    """Base exception class for the ARP Ping Scanner."""

    error_type = ErrorType.CONFIGURATION_ERROR

    def __init__(self, message: str, error_context: Optional[ErrorContext] = None):
        super().__init__(message)
        self.error_context = error_context


class InvalidRangeFormat(ArpPingScannerError):
    """The range string is not of the form ``<address>/<prefixLength>``."""
    error_type = ErrorType.INVALID_RANGE


class UnsupportedAddressFamily(ArpPingScannerError):
    """The range parsed, but its address is not IPv4."""
    error_type = ErrorType.UNSUPPORTED_FAMILY


class AddressLimitExceeded(ArpPingScannerError):
    """The range holds more addresses than the configured guard allows."""
    error_type = ErrorType.ADDRESS_LIMIT


class ConfigurationError(ArpPingScannerError):
    """Exception for configuration-related errors."""
    error_type = ErrorType.CONFIGURATION_ERROR


class AggregationError(ArpPingScannerError):
    """An address has no outcome when the result set is assembled."""
    error_type = ErrorType.PROBE_ERROR


class ProbeError(Exception):
    """Raised by probe backends when the probing mechanism itself fails."""


class ErrorHandler:
    """
    Reports fatal errors with a short list of troubleshooting suggestions.

    Nothing is retried: every error reaching the handler ends the invocation.
    """

    def __init__(self, logger: Optional[Logger] = None):
        self.logger = logger or get_logger(__name__)
        self.error_statistics: Dict[ErrorType, int] = {
            error_type: 0 for error_type in ErrorType
        }

    def handle_error(self, error: Exception, context: ErrorContext) -> List[str]:
        """
        Log an error and the suggestions that go with its type.

        Args:
            error: The exception that occurred
            context: Error context information

        Returns:
            The suggestions that were logged
        """
        self.error_statistics[context.error_type] += 1
        self._log_error(error, context)

        suggestions = self.suggestions_for(context.error_type)
        if suggestions:
            self.logger.info("Suggestions:")
            for suggestion in suggestions:
                self.logger.info(f"  • {suggestion}")
        return suggestions

    def handle_scanner_error(self, error: ArpPingScannerError, operation: str) -> List[str]:
        """Shortcut for errors from this package, which know their own type."""
        context = error.error_context or ErrorContext(
            error_type=error.error_type,
            severity=ErrorSeverity.HIGH,
            operation=operation,
            component=type(error).__name__,
        )
        return self.handle_error(error, context)

    def _log_error(self, error: Exception, context: ErrorContext) -> None:
        error_msg = f"Error in {context.component}.{context.operation}: {str(error)}"

        if context.severity == ErrorSeverity.CRITICAL:
            self.logger.error(error_msg, exception=error)
        elif context.severity == ErrorSeverity.HIGH:
            self.logger.error(error_msg)
        elif context.severity == ErrorSeverity.MEDIUM:
            self.logger.warning(error_msg)
        else:
            self.logger.debug(error_msg)

    @staticmethod
    def suggestions_for(error_type: ErrorType) -> List[str]:
        suggestions = {
            ErrorType.INVALID_RANGE: [
                "Use CIDR notation: <address>/<prefix>, e.g. 192.168.10.0/24",
                "The prefix length must be between 0 and 32",
            ],
            ErrorType.UNSUPPORTED_FAMILY: [
                "Only IPv4 ranges can be scanned",
                "Pass an IPv4 network such as 10.0.0.0/24",
            ],
            ErrorType.ADDRESS_LIMIT: [
                "Use a longer prefix to scan a smaller range",
                "Raise max_addresses (or --max-addresses) if the range is intended",
            ],
            ErrorType.CONFIGURATION_ERROR: [
                "Check YAML syntax and indentation",
                "Ensure concurrency_limit is a positive integer",
            ],
            ErrorType.FILE_ERROR: [
                "Check file and directory permissions",
                "Ensure the output directory is writable",
            ],
        }
        return suggestions.get(error_type, [])
