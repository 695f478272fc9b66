"""
HTTP Retry - Retry Logic.

Exponential backoff, Retry-After handling and the per-attempt decision engine.
"""

from .config import RetryConfig
from .backoff import compute_delay, parse_retry_after
from .decision import (
    AttemptOutcome,
    Decision,
    RetryDecider,
    RetryDirective,
    Verdict,
    classify_outcome,
    resolve_outcome,
)

__all__ = [
    "RetryConfig",
    "compute_delay",
    "parse_retry_after",
    "AttemptOutcome",
    "Decision",
    "RetryDecider",
    "RetryDirective",
    "Verdict",
    "classify_outcome",
    "resolve_outcome",
]
