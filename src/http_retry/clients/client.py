"""
Synchronous retrying client.

Each logical request opens its own httpx.Client, so retry state is never
shared between calls.
"""

import logging
import time
from typing import Any

import httpx

from .base import BaseRetryClient
from ..exceptions import InvalidOptionError
from ..retry import AttemptOutcome, Decision, RetryConfig, RetryDecider

logger = logging.getLogger(__name__)


class RetryClient(BaseRetryClient):
    """
    Blocking HTTP client with retry.

    Features:
    - Exponential backoff (1s, 2s, 4s, ...) without jitter
    - Retry-After support for 429 and 503
    - on_retry callback that can stop, fail, retry or rewrite the request
    - Dry-run mode serving canned responses
    """

    @property
    def _transport_type(self) -> type:
        return httpx.BaseTransport

    def request(self, method: str, url: httpx.URL | str, **options: Any) -> httpx.Response:
        """Build and send a request, retrying per the configured policy."""
        retry_config, client_kwargs, send_kwargs = self._layer(options)

        with httpx.Client(**client_kwargs) as client:
            request = client.build_request(method, url, **options)
            return self._send_with_retry(client, request, retry_config, send_kwargs)

    def send(self, request: httpx.Request, **options: Any) -> httpx.Response:
        """Send a prepared request, retrying per the configured policy."""
        request = self._check_request(request)
        retry_config, client_kwargs, send_kwargs = self._layer(options)
        if options:
            raise InvalidOptionError(f"Unknown send options: {', '.join(options)}")

        with httpx.Client(**client_kwargs) as client:
            return self._send_with_retry(client, request, retry_config, send_kwargs)

    def get(self, url: httpx.URL | str, **options: Any) -> httpx.Response:
        return self.request("GET", url, **options)

    def post(self, url: httpx.URL | str, **options: Any) -> httpx.Response:
        return self.request("POST", url, **options)

    def _send_with_retry(
        self,
        client: httpx.Client,
        request: httpx.Request,
        retry_config: RetryConfig,
        send_kwargs: dict[str, Any],
    ) -> httpx.Response:
        decider = RetryDecider(retry_config)
        attempt = 0

        while True:
            outcome = self._attempt(client, request, attempt, send_kwargs)
            verdict = decider.evaluate(outcome)

            if verdict.decision is not Decision.RETRY:
                return self._finish(verdict, outcome, retry_config)

            request = verdict.request
            time.sleep(verdict.delay / 1000)
            attempt += 1

    def _attempt(
        self,
        client: httpx.Client,
        request: httpx.Request,
        attempt: int,
        send_kwargs: dict[str, Any],
    ) -> AttemptOutcome:
        try:
            response = client.send(request, **send_kwargs)
        except httpx.RequestError as e:
            logger.debug(f"Attempt {attempt} to {request.url} failed: {e!r}")
            return AttemptOutcome(attempt, request, error=e)
        return self._outcome(attempt, request, response)
