"""
Base exception classes for retrying HTTP client operations.

Usage errors double as the matching builtin (``TypeError`` or ``ValueError``)
so callers can catch them either way. Transport and HTTP status errors from
``httpx`` are never wrapped; they propagate unchanged once retrying stops.
"""


class RetryClientError(Exception):
    """Base exception for all retry client errors."""

    def __init__(self, message: str, *, option: str | None = None):
        super().__init__(message)
        self.message = message
        self.option = option

    def __str__(self) -> str:
        if self.option:
            return f"[{self.option}] {self.message}"
        return self.message


class InvalidOptionError(RetryClientError, TypeError):
    """Raised when a configuration option has the wrong type."""


class OptionRangeError(RetryClientError, ValueError):
    """Raised when a configuration option is outside its allowed range."""


class InvalidDecisionError(RetryClientError, TypeError):
    """Raised when an on_retry callback returns something that is not a decision."""

    def __init__(self, message: str = "Invalid retry decision", *, value=None, **kwargs):
        kwargs.setdefault("option", "on_retry")
        super().__init__(message, **kwargs)
        self.value = value


class DecisionRangeError(RetryClientError, ValueError):
    """Raised when an on_retry callback returns an out-of-range integer."""

    def __init__(self, message: str = "Retry decision out of range", *, value: int | None = None, **kwargs):
        kwargs.setdefault("option", "on_retry")
        super().__init__(message, **kwargs)
        self.value = value


class RetryAfterError(RetryClientError, ValueError):
    """Raised when a Retry-After header is neither a number nor an HTTP-date."""

    def __init__(self, message: str = "Malformed Retry-After header", *, value: str | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.value = value


class RetryStateError(RetryClientError):
    """Raised when an attempt produced neither a response nor an error."""

    def __init__(self, message: str = "Attempt produced neither a response nor an error", **kwargs):
        super().__init__(message, **kwargs)


class DryRunExhaustedError(RetryClientError):
    """Raised when a dry run is asked for more responses than it was given."""

    def __init__(self, message: str = "Dry run response queue is exhausted", **kwargs):
        kwargs.setdefault("option", "dry_run")
        super().__init__(message, **kwargs)
