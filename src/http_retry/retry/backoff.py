"""
Backoff calculation and Retry-After interpretation.
"""

import re
from datetime import timezone
from email.utils import parsedate_to_datetime

from ..exceptions import RetryAfterError

BASE_DELAY_MS = 1000

_NUMERIC = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)\s*$")


def compute_delay(attempt: int, override: int | None = None) -> int:
    """
    Calculate the delay before the retry that follows an attempt.

    Args:
        attempt: Zero-based attempt number
        override: Delay set during this evaluation, returned verbatim

    Returns:
        Delay in milliseconds
    """
    if override is not None:
        return override

    return BASE_DELAY_MS * (2**attempt)


def parse_retry_after(value: str | None, now: int) -> int | None:
    """
    Interpret a Retry-After header value relative to now.

    The header should hold either delta-seconds or an HTTP-date, but some
    servers send an absolute Unix timestamp instead. A number at or past the
    current time is treated as such a timestamp.

    Args:
        value: Raw header value, or None when the header is missing; blank
            values give no explicit delay
        now: Current Unix time in whole seconds

    Returns:
        Delay in milliseconds, or None when there is no positive delay

    Raises:
        RetryAfterError: If the value is neither numeric nor an HTTP-date
    """
    if value is None or not value.strip():
        return None

    if _NUMERIC.match(value):
        seconds = int(float(value))
        if seconds >= now:
            seconds -= now
        delay = seconds * 1000
    else:
        try:
            parsed = parsedate_to_datetime(value.strip())
        except (TypeError, ValueError, IndexError) as e:
            raise RetryAfterError(
                f"Cannot parse Retry-After value {value!r}", value=value
            ) from e
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        delay = (int(parsed.timestamp()) - now) * 1000

    if delay <= 0:
        return None
    return delay
