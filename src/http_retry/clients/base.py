"""
Base retrying client.

Holds the client-level defaults and layers per-request options over them.
The sync and async clients only differ in how they send and wait.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from .transport import (
    dry_run_transport,
    normalize_dry_run,
    validate_event_hooks,
    validate_transport,
)
from ..exceptions import InvalidOptionError
from ..retry import AttemptOutcome, Decision, RetryConfig, Verdict, resolve_outcome

logger = logging.getLogger(__name__)

RETRY_OPTIONS = ("max_retries", "on_retry", "logger")

# Keyword arguments that belong to Client.send rather than build_request
SEND_OPTIONS = ("auth", "follow_redirects")


class BaseRetryClient(ABC):
    """
    Abstract base class for retrying HTTP clients.

    By default requests are retried with exponential backoff (1s, 2s, 4s, ...)
    when the response status is 400 or higher or the transport fails, except
    for 400, 404 and 410. A 429 or 503 with a Retry-After header waits as long
    as the server asked. An ``on_retry`` callback may override any of this.
    """

    REQUEST_STOP = Decision.STOP
    REQUEST_RETRY = Decision.RETRY
    REQUEST_CONTINUE = Decision.CONTINUE
    REQUEST_FAIL = Decision.FAIL

    # httpx.AsyncClient awaits its event hooks
    _async_hooks = False

    def __init__(
        self,
        *,
        retry_config: RetryConfig | None = None,
        max_retries: int | None = None,
        on_retry=None,
        logger: logging.Logger | None = None,
        dry_run: Any = False,
        transport: Any = None,
        event_hooks: dict | None = None,
        **client_kwargs: Any,
    ):
        """
        Initialize the client.

        Args:
            retry_config: Base retry configuration
            max_retries: Maximum retry attempts; 0 disables retrying (default: 10)
            on_retry: Callback for retry decision logic
            logger: Logger for retry diagnostics
            dry_run: Serve canned responses instead of using the network
            transport: Custom httpx transport
            event_hooks: httpx event hooks, called on every attempt
            **client_kwargs: Passed to the httpx client (base_url, timeout, headers, ...)
        """
        if retry_config is None:
            retry_config = RetryConfig()
        elif not isinstance(retry_config, RetryConfig):
            raise InvalidOptionError(
                f"retry_config needs to be a RetryConfig; {type(retry_config).__name__} given",
                option="retry_config",
            )

        self.retry_config = retry_config.merge(
            max_retries=max_retries, on_retry=on_retry, logger=logger
        )
        self.dry_run = normalize_dry_run(dry_run)
        self.transport = validate_transport(transport, self._transport_type)
        self.event_hooks = validate_event_hooks(event_hooks, self._async_hooks)
        self.client_kwargs = client_kwargs

    @property
    @abstractmethod
    def _transport_type(self) -> type:
        """Transport base class this client can drive."""
        ...

    def _layer(self, options: dict[str, Any]) -> tuple[RetryConfig, dict[str, Any], dict[str, Any]]:
        """
        Merge per-request options over the client defaults.

        Consumes the options this client understands from ``options`` and
        leaves the rest for build_request.

        Returns:
            The retry config, httpx client kwargs and send kwargs
        """
        retry_config = self.retry_config.merge(
            **{name: options.pop(name, None) for name in RETRY_OPTIONS}
        )

        dry_run = options.pop("dry_run", None)
        transport = options.pop("transport", None)
        hooks = options.pop("event_hooks", None)

        responses = normalize_dry_run(dry_run) if dry_run is not None else None
        transport = validate_transport(transport, self._transport_type)
        if dry_run is None and transport is None:
            responses, transport = self.dry_run, self.transport
        hooks = (
            validate_event_hooks(hooks, self._async_hooks) if hooks is not None else self.event_hooks
        )

        client_kwargs = dict(self.client_kwargs)
        if responses is not None:
            client_kwargs["transport"] = dry_run_transport(responses)
        elif transport is not None:
            client_kwargs["transport"] = transport
        if hooks:
            client_kwargs["event_hooks"] = hooks

        send_kwargs = {name: options.pop(name) for name in SEND_OPTIONS if name in options}
        return retry_config, client_kwargs, send_kwargs

    @staticmethod
    def _check_request(request: Any) -> httpx.Request:
        if not isinstance(request, httpx.Request):
            raise InvalidOptionError(
                f"request needs to be an httpx.Request; {type(request).__name__} given",
                option="request",
            )
        return request

    @staticmethod
    def _outcome(attempt: int, request: httpx.Request, response: httpx.Response) -> AttemptOutcome:
        """Attach the status error to every response of 400 and above."""
        if response.status_code < 400:
            return AttemptOutcome(attempt, request, response=response)
        # raise_for_status raises for any non-2xx, including codes past 599
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            return AttemptOutcome(attempt, request, response=response, error=e)
        return AttemptOutcome(attempt, request, response=response)

    @staticmethod
    def _finish(verdict: Verdict, outcome: AttemptOutcome, config: RetryConfig) -> httpx.Response:
        """Return or raise the final outcome of a logical request."""
        if verdict.exhausted and outcome.error is not None and config.max_retries > 0:
            (config.logger or logger).error(
                f"All {config.max_retries} retries exhausted for "
                f"{outcome.request.method} {outcome.request.url}: {outcome.error}"
            )
        return resolve_outcome(verdict, outcome)

    @abstractmethod
    def request(self, method: str, url: httpx.URL | str, **options: Any):
        """
        Build and send a request, retrying per the configured policy.

        Args:
            method: HTTP method (GET, POST, etc.)
            url: Target URL, joined to base_url when relative
            **options: Retry options for this request (max_retries, on_retry,
                logger, dry_run, transport, event_hooks) and httpx request
                options (headers, params, json, content, auth, ...)

        Returns:
            The final response
        """
        ...

    @abstractmethod
    def send(self, request: httpx.Request, **options: Any):
        """
        Send a prepared request, retrying per the configured policy.

        Args:
            request: The request to send
            **options: Retry options for this request plus auth and follow_redirects

        Returns:
            The final response
        """
        ...
