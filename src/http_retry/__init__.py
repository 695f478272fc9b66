"""
HTTP Retry - Retrying HTTP clients on top of httpx.

Exponential backoff, Retry-After handling and a callback protocol that can
override every retry decision.
"""

from .clients import BaseRetryClient, RetryClient, AsyncRetryClient
from .exceptions import (
    RetryClientError,
    InvalidOptionError,
    OptionRangeError,
    InvalidDecisionError,
    DecisionRangeError,
    RetryAfterError,
    RetryStateError,
    DryRunExhaustedError,
)
from .retry import (
    AttemptOutcome,
    Decision,
    RetryConfig,
    RetryDecider,
    RetryDirective,
    compute_delay,
    parse_retry_after,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Clients
    "BaseRetryClient",
    "RetryClient",
    "AsyncRetryClient",
    # Exceptions
    "RetryClientError",
    "InvalidOptionError",
    "OptionRangeError",
    "InvalidDecisionError",
    "DecisionRangeError",
    "RetryAfterError",
    "RetryStateError",
    "DryRunExhaustedError",
    # Retry
    "AttemptOutcome",
    "Decision",
    "RetryConfig",
    "RetryDecider",
    "RetryDirective",
    "compute_delay",
    "parse_retry_after",
]
