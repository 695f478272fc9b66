"""
Retry decisions for a single attempt.

An attempt outcome goes through the retry budget check, then the optional
``on_retry`` callback, then the built-in classifier. The result is a
``Verdict`` telling the attempt loop to stop, fail, or resend after a delay.
"""

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

import httpx

from .backoff import compute_delay, parse_retry_after
from .config import RetryConfig
from ..exceptions import DecisionRangeError, InvalidDecisionError, RetryStateError

logger = logging.getLogger(__name__)

# Client errors that retrying cannot fix
NO_RETRY_CODES = frozenset({400, 404, 410})

# Statuses whose Retry-After header is honored
RETRY_AFTER_CODES = frozenset({429, 503})


class Decision(IntEnum):
    """Result of one retry evaluation, also the on_retry return protocol."""

    STOP = 0  # return the response, or raise the error, as-is
    RETRY = 1  # resend without consulting the built-in policy
    CONTINUE = 2  # defer to the built-in policy
    FAIL = 3  # raise even when a response exists


@dataclass(frozen=True)
class AttemptOutcome:
    """
    What one send produced.

    Responses with an error status carry both the response and the
    ``httpx.HTTPStatusError`` raised for it. Network failures carry only
    the error.
    """

    attempt: int
    request: httpx.Request
    response: httpx.Response | None = None
    error: Exception | None = None

    @property
    def status_code(self) -> int:
        """Response status, or 0 when there is no response."""
        if self.response is None:
            return 0
        return self.response.status_code


@dataclass(frozen=True)
class RetryDirective:
    """
    A decision returned by on_retry, with an optional replacement request
    and delay override in milliseconds.
    """

    decision: Decision
    request: httpx.Request | None = None
    delay: int | None = None

    @classmethod
    def stop(cls) -> "RetryDirective":
        return cls(Decision.STOP)

    @classmethod
    def fail(cls) -> "RetryDirective":
        return cls(Decision.FAIL)

    @classmethod
    def retry(cls, request: httpx.Request | None = None, delay: int | None = None) -> "RetryDirective":
        """Resend, optionally with a different request or delay."""
        return cls(Decision.RETRY, request=request, delay=delay)

    @classmethod
    def proceed(cls, delay: int | None = None) -> "RetryDirective":
        """Continue to the built-in policy, optionally suggesting a delay."""
        return cls(Decision.CONTINUE, delay=delay)


@dataclass(frozen=True)
class Verdict:
    """Final decision for one attempt; delay is set only on RETRY."""

    decision: Decision
    request: httpx.Request
    delay: int | None = None
    exhausted: bool = False


def coerce_decision(value: Any) -> Decision:
    """
    Convert a callback result into a Decision.

    Raises:
        InvalidDecisionError: If the value is not a Decision or an integer
        DecisionRangeError: If the integer is not a known decision
    """
    if isinstance(value, Decision):
        return value
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidDecisionError(
            f"on_retry must return a Decision or an integer; {type(value).__name__} given",
            value=value,
        )
    try:
        return Decision(value)
    except ValueError:
        raise DecisionRangeError(
            f"on_retry must return an integer between {int(min(Decision))} and {int(max(Decision))}; "
            f"{value} given",
            value=value,
        ) from None


def coerce_directive(result: Any) -> RetryDirective:
    """Normalize anything on_retry may return into a RetryDirective."""
    if not isinstance(result, RetryDirective):
        return RetryDirective(coerce_decision(result))

    decision = coerce_decision(result.decision)
    if result.request is not None and not isinstance(result.request, httpx.Request):
        raise InvalidDecisionError(
            f"on_retry replacement request must be an httpx.Request; "
            f"{type(result.request).__name__} given",
            value=result,
        )
    if result.delay is not None and (
        isinstance(result.delay, bool) or not isinstance(result.delay, int)
    ):
        raise InvalidDecisionError(
            f"on_retry delay must be an integer of milliseconds; "
            f"{type(result.delay).__name__} given",
            value=result,
        )
    if decision is result.decision:
        return result
    return RetryDirective(decision, request=result.request, delay=result.delay)


def classify_outcome(outcome: AttemptOutcome) -> Decision:
    """Built-in policy: RETRY, FAIL, or STOP when there is nothing to retry."""
    if outcome.response is None and outcome.error is None:
        return Decision.FAIL

    code = outcome.status_code
    if code in NO_RETRY_CODES:
        return Decision.FAIL
    if code in RETRY_AFTER_CODES:
        return Decision.RETRY
    if outcome.error is None and code < 400:
        return Decision.STOP
    return Decision.RETRY


def resolve_outcome(verdict: Verdict, outcome: AttemptOutcome) -> httpx.Response:
    """
    Turn a terminal verdict into the response returned to the caller.

    Raises:
        Exception: The attempt's own error, unchanged, when there is one
        httpx.HTTPStatusError: On FAIL with a response but no error
        RetryStateError: When the attempt produced nothing at all
    """
    if outcome.error is not None:
        raise outcome.error
    if outcome.response is None:
        raise RetryStateError()
    if verdict.decision is Decision.FAIL:
        raise httpx.HTTPStatusError(
            f"Retry policy failed the request to '{outcome.request.url}' "
            f"with status {outcome.response.status_code}",
            request=outcome.request,
            response=outcome.response,
        )
    return outcome.response


class RetryDecider:
    """
    Evaluates attempt outcomes for one logical request.

    Holds no state between evaluations; the delay override lives only
    inside ``evaluate``.
    """

    def __init__(self, config: RetryConfig):
        self.config = config
        self.logger = config.logger or logger

    def evaluate(self, outcome: AttemptOutcome) -> Verdict:
        """Decide what to do after an attempt."""
        override: int | None = None
        replacement: httpx.Request | None = None

        if outcome.attempt >= self.config.max_retries:
            return Verdict(Decision.STOP, outcome.request, exhausted=True)

        if self.config.on_retry is not None:
            directive = coerce_directive(self.config.on_retry(outcome))
            override = directive.delay
            replacement = directive.request

            if directive.decision is Decision.RETRY:
                delay = compute_delay(outcome.attempt, override)
                self.logger.debug(
                    f"on_retry requested a retry after {delay / 1000}s "
                    f"({outcome.attempt + 1}/{self.config.max_retries})"
                )
                return self._retry(outcome, replacement, delay)
            if directive.decision is not Decision.CONTINUE:
                return Verdict(directive.decision, outcome.request)

        decision = classify_outcome(outcome)
        if decision is not Decision.RETRY:
            return Verdict(decision, outcome.request)

        code = outcome.status_code
        if code in RETRY_AFTER_CODES:
            retry_after = parse_retry_after(
                outcome.response.headers.get("Retry-After"),
                int(self.config.clock()),
            )
            if retry_after is not None:
                override = retry_after

        delay = compute_delay(outcome.attempt, override)
        self._log_retry(outcome, delay)
        return self._retry(outcome, replacement, delay)

    def _retry(self, outcome: AttemptOutcome, replacement: httpx.Request | None, delay: int) -> Verdict:
        return Verdict(
            Decision.RETRY,
            replacement if replacement is not None else outcome.request,
            delay=max(0, delay),
        )

    def _log_retry(self, outcome: AttemptOutcome, delay: int) -> None:
        progress = f"({outcome.attempt + 1}/{self.config.max_retries})"
        if isinstance(outcome.error, httpx.RequestError):
            self.logger.debug(
                f"{outcome.status_code} error ({type(outcome.error).__name__}), "
                f"retrying after {delay / 1000}s {progress}"
            )
        else:
            self.logger.debug(
                f"{outcome.status_code} error, retrying after {delay / 1000}s {progress}"
            )
