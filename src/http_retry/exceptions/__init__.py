"""
HTTP Retry - Exception Hierarchy.

Usage, configuration and decision errors raised by the retry client.
"""

from .base import (
    RetryClientError,
    InvalidOptionError,
    OptionRangeError,
    InvalidDecisionError,
    DecisionRangeError,
    RetryAfterError,
    RetryStateError,
    DryRunExhaustedError,
)

__all__ = [
    "RetryClientError",
    "InvalidOptionError",
    "OptionRangeError",
    "InvalidDecisionError",
    "DecisionRangeError",
    "RetryAfterError",
    "RetryStateError",
    "DryRunExhaustedError",
]
