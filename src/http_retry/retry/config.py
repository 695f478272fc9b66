"""
Retry configuration and option validation.
"""

import logging
import time
from dataclasses import dataclass, field, fields, replace
from typing import Any, Callable

from ..exceptions import InvalidOptionError, OptionRangeError


def _type_name(value: Any) -> str:
    return type(value).__name__


@dataclass
class RetryConfig:
    """
    Configuration for retry behavior.

    Attributes:
        max_retries: Maximum number of retry attempts; 0 disables retrying (default: 10)
        on_retry: Callback consulted on every attempt before the built-in policy
        logger: Logger for retry diagnostics (default: the decision module's logger)
        clock: Source of the current Unix time in seconds (default: time.time)
    """

    max_retries: int = 10
    on_retry: Callable[..., Any] | None = None
    logger: logging.Logger | logging.LoggerAdapter | None = None
    clock: Callable[[], float] = field(default=time.time, repr=False)

    def __post_init__(self) -> None:
        if isinstance(self.max_retries, bool) or not isinstance(self.max_retries, int):
            raise InvalidOptionError(
                f"max_retries needs to be an integer; {_type_name(self.max_retries)} given",
                option="max_retries",
            )
        if self.max_retries < 0:
            raise OptionRangeError(
                f"max_retries needs to be >= 0; {self.max_retries} given",
                option="max_retries",
            )
        if self.on_retry is not None and not callable(self.on_retry):
            raise InvalidOptionError(
                f"on_retry needs to be a callable; {_type_name(self.on_retry)} given",
                option="on_retry",
            )
        if self.logger is not None and not isinstance(
            self.logger, (logging.Logger, logging.LoggerAdapter)
        ):
            raise InvalidOptionError(
                f"logger needs to be a logging.Logger; {_type_name(self.logger)} given",
                option="logger",
            )
        if not callable(self.clock):
            raise InvalidOptionError(
                f"clock needs to be a callable; {_type_name(self.clock)} given",
                option="clock",
            )

    def merge(self, **overrides: Any) -> "RetryConfig":
        """
        Layer per-call overrides on top of this configuration.

        Overrides left as None keep the base value. Unknown names raise
        InvalidOptionError.
        """
        known = {f.name for f in fields(self)}
        for name in overrides:
            if name not in known:
                raise InvalidOptionError("Unknown retry option", option=name)

        changes = {name: value for name, value in overrides.items() if value is not None}
        if not changes:
            return self
        return replace(self, **changes)

    @classmethod
    def no_retry(cls) -> "RetryConfig":
        """Preset for no retry (single attempt only)."""
        return cls(max_retries=0)
