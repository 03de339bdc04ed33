"""Structured error taxonomy for Finnhub tools.

Every failure a tool invocation can hit is represented by a subclass of
StructuredError. The adapter never retries: each error is terminal for the
invocation and is surfaced to the caller as an error ToolResult carrying the
error message and, where applicable, the underlying cause or raw response body.

All errors provide:
- A human-readable message (this is the text shown to the tool caller)
- Error category and severity metadata
- A retryable hint for clients (the adapter itself never retries)
- Consistent to_dict() for JSON serialization

Example:
    >>> try:
    ...     raise APIError(status=404, body=b'{"error": "not found"}')
    ... except StructuredError as e:
    ...     error_json = e.to_dict()
    ...     print(error_json["error_type"])
    ...     print(error_json["details"]["status"])
"""
from enum import Enum
from typing import Optional, Dict, Any
from datetime import datetime, timezone


class ErrorCategory(Enum):
    """Error categories for classification."""
    VALIDATION = "validation"         # Malformed tool arguments
    EXECUTION = "execution"           # Upstream call failed (network, HTTP status, body)
    TIMEOUT = "timeout"               # Upstream call exceeded the configured timeout
    CONFIGURATION = "configuration"   # Bad base URL, duplicate tool names, etc.
    UNKNOWN = "unknown"               # Unclassified errors


class ErrorSeverity(Enum):
    """Error severity levels."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class StructuredError(Exception):
    """Base class for all structured errors.

    Attributes:
        message: Human-readable error message
        category: ErrorCategory classification
        severity: ErrorSeverity level
        retryable: Whether the caller may reasonably try again
        details: Additional context (dict)
        cause: Underlying exception, if any
        timestamp: When the error occurred

    Example:
        >>> error = StructuredError(
        ...     "Something went wrong",
        ...     category=ErrorCategory.EXECUTION,
        ...     details={"tool": "get_news"}
        ... )
        >>> error.to_dict()["error_type"]
        'StructuredError'
    """

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        retryable: bool = False,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.severity = severity
        self.retryable = retryable
        self.details = details or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to structured dictionary.

        Returns:
            Dictionary with error details in predictable schema:
            {
                "error_type": "ErrorClassName",
                "message": "Human-readable message",
                "category": "validation|execution|timeout|...",
                "severity": "info|warning|error|critical",
                "retryable": true|false,
                "details": {...},
                "timestamp": "2024-01-01T12:00:00.000000+00:00"
            }
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "retryable": self.retryable,
            "details": self.details,
            "timestamp": self.timestamp.isoformat()
        }


def _with_cause(prefix: str, cause: Optional[BaseException]) -> str:
    if cause is None:
        return prefix
    return f"{prefix}: {cause}"


class InvalidArgumentsError(StructuredError):
    """Raised when the tool arguments payload is not a key/value mapping."""

    def __init__(
        self,
        message: str = "Invalid arguments object",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.ERROR,
            retryable=False,
            details=details
        )


class RequestConstructionError(StructuredError):
    """Raised when the request URL cannot be turned into a valid request.

    Almost always a misconfigured base URL (missing scheme, bad host), so it is
    classified as a configuration problem rather than an execution one.

    Example:
        >>> raise RequestConstructionError(
        ...     cause=ValueError("Invalid URL 'finnhub.io/news': No scheme supplied"),
        ...     details={"url": "finnhub.io/news"}
        ... )
    """

    def __init__(
        self,
        cause: Optional[BaseException] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=_with_cause("Failed to create request", cause),
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.CRITICAL,
            retryable=False,
            details=details,
            cause=cause
        )


class TransportError(StructuredError):
    """Raised when the network call itself fails.

    Covers DNS failures, refused connections, TLS errors and timeouts. Timeouts
    are classified under ErrorCategory.TIMEOUT so dashboards can tell them
    apart from hard connection failures.
    """

    def __init__(
        self,
        cause: Optional[BaseException] = None,
        timed_out: bool = False,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=_with_cause("Request failed", cause),
            category=ErrorCategory.TIMEOUT if timed_out else ErrorCategory.EXECUTION,
            severity=ErrorSeverity.WARNING if timed_out else ErrorSeverity.ERROR,
            retryable=True,
            details=details,
            cause=cause
        )
        self.timed_out = timed_out


class BodyReadError(StructuredError):
    """Raised when the response arrived but its body could not be read."""

    def __init__(
        self,
        cause: Optional[BaseException] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=_with_cause("Failed to read response body", cause),
            category=ErrorCategory.EXECUTION,
            severity=ErrorSeverity.ERROR,
            retryable=True,
            details=details,
            cause=cause
        )


class APIError(StructuredError):
    """Raised when the upstream API answers with an HTTP status >= 400.

    The raw response body is surfaced verbatim in the message, whether or not
    it is valid JSON.

    Attributes:
        status: HTTP status code returned by the API
        body: Raw response body bytes
    """

    def __init__(
        self,
        status: int,
        body: bytes,
        details: Optional[Dict[str, Any]] = None
    ):
        text = body.decode("utf-8", errors="replace")
        merged = {"status": status}
        merged.update(details or {})
        super().__init__(
            message=f"API error: {text}",
            category=ErrorCategory.EXECUTION,
            severity=ErrorSeverity.ERROR,
            # 5xx and 429 may clear up on their own; other 4xx need different input
            retryable=status >= 500 or status == 429,
            details=merged
        )
        self.status = status
        self.body = body


class FormatError(StructuredError):
    """Raised when a parsed JSON body cannot be re-serialized."""

    def __init__(
        self,
        cause: Optional[BaseException] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=_with_cause("Failed to format JSON", cause),
            category=ErrorCategory.EXECUTION,
            severity=ErrorSeverity.ERROR,
            retryable=False,
            details=details,
            cause=cause
        )


class ConfigurationError(StructuredError):
    """Error in tool or API configuration.

    Raised at startup when required configuration is invalid, e.g. two tools
    registered under the same name or a malformed timeout value.

    Example:
        >>> raise ConfigurationError(
        ...     "Duplicate tool name: get_news",
        ...     details={"tool": "get_news"}
        ... )
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.CRITICAL,
            retryable=False,
            details=details
        )
