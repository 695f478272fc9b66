"""
Asynchronous retrying client.

Same decisions as RetryClient; waits are ``asyncio.sleep`` so cancelling the
task aborts a pending retry.
"""

import asyncio
import logging
from typing import Any

import httpx

from .base import BaseRetryClient
from ..exceptions import InvalidOptionError
from ..retry import AttemptOutcome, Decision, RetryConfig, RetryDecider

logger = logging.getLogger(__name__)


class AsyncRetryClient(BaseRetryClient):
    """Non-blocking HTTP client with retry."""

    _async_hooks = True

    @property
    def _transport_type(self) -> type:
        return httpx.AsyncBaseTransport

    async def request(self, method: str, url: httpx.URL | str, **options: Any) -> httpx.Response:
        """Build and send a request, retrying per the configured policy."""
        retry_config, client_kwargs, send_kwargs = self._layer(options)

        async with httpx.AsyncClient(**client_kwargs) as client:
            request = client.build_request(method, url, **options)
            return await self._send_with_retry(client, request, retry_config, send_kwargs)

    async def send(self, request: httpx.Request, **options: Any) -> httpx.Response:
        """Send a prepared request, retrying per the configured policy."""
        request = self._check_request(request)
        retry_config, client_kwargs, send_kwargs = self._layer(options)
        if options:
            raise InvalidOptionError(f"Unknown send options: {', '.join(options)}")

        async with httpx.AsyncClient(**client_kwargs) as client:
            return await self._send_with_retry(client, request, retry_config, send_kwargs)

    async def get(self, url: httpx.URL | str, **options: Any) -> httpx.Response:
        return await self.request("GET", url, **options)

    async def post(self, url: httpx.URL | str, **options: Any) -> httpx.Response:
        return await self.request("POST", url, **options)

    async def _send_with_retry(
        self,
        client: httpx.AsyncClient,
        request: httpx.Request,
        retry_config: RetryConfig,
        send_kwargs: dict[str, Any],
    ) -> httpx.Response:
        decider = RetryDecider(retry_config)
        attempt = 0

        while True:
            outcome = await self._attempt(client, request, attempt, send_kwargs)
            verdict = decider.evaluate(outcome)
            if verdict.decision is not Decision.RETRY:
                return self._finish(verdict, outcome, retry_config)

            request = verdict.request
            await asyncio.sleep(verdict.delay / 1000)
            attempt += 1

    async def _attempt(
        self,
        client: httpx.AsyncClient,
        request: httpx.Request,
        attempt: int,
        send_kwargs: dict[str, Any],
    ) -> AttemptOutcome:
        try:
            response = await client.send(request, **send_kwargs)
        except httpx.RequestError as e:
            logger.debug(f"Attempt {attempt} to {request.url} failed: {e!r}")
            return AttemptOutcome(attempt, request, error=e)
        return self._outcome(attempt, request, response)
