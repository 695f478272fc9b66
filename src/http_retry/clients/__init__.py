"""
HTTP Retry - Clients.

Sync and async HTTP clients that retry according to the decision engine.
"""

from .base import BaseRetryClient
from .client import RetryClient
from .async_client import AsyncRetryClient

__all__ = [
    "BaseRetryClient",
    "RetryClient",
    "AsyncRetryClient",
]
