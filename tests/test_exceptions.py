"""Tests for exceptions module - behavior focused."""

import pytest
from http_retry.exceptions import (
    RetryClientError,
    InvalidOptionError,
    OptionRangeError,
    InvalidDecisionError,
    DecisionRangeError,
    RetryAfterError,
    RetryStateError,
    DryRunExhaustedError,
)


class TestBuiltinCompatibility:
    """Test that usage errors can be caught as the matching builtin."""

    @pytest.mark.parametrize("exception_class", [InvalidOptionError, InvalidDecisionError])
    def test_type_errors(self, exception_class):
        """Wrong-type errors are TypeErrors."""
        assert isinstance(exception_class("bad"), TypeError)

    @pytest.mark.parametrize(
        "exception_class", [OptionRangeError, DecisionRangeError, RetryAfterError]
    )
    def test_value_errors(self, exception_class):
        """Out-of-range and malformed-value errors are ValueErrors."""
        assert isinstance(exception_class("bad"), ValueError)

    def test_state_error_is_not_a_builtin_usage_error(self):
        """RetryStateError is neither a TypeError nor a ValueError."""
        error = RetryStateError()
        assert not isinstance(error, (TypeError, ValueError))


class TestExceptionStringRepresentation:
    """Test that exception string includes useful context."""

    def test_str_includes_message(self):
        """String representation should include the message."""
        error = RetryClientError("Something went wrong")
        assert str(error) == "Something went wrong"

    def test_str_includes_option_when_set(self):
        """String representation should name the option."""
        error = InvalidOptionError("needs to be an integer", option="max_retries")
        assert str(error) == "[max_retries] needs to be an integer"

    def test_decision_errors_name_on_retry(self):
        """Callback errors point at the on_retry option."""
        assert "on_retry" in str(InvalidDecisionError())
        assert "on_retry" in str(DecisionRangeError())

    def test_dry_run_error_names_dry_run(self):
        """Dry run exhaustion points at the dry_run option."""
        assert "dry_run" in str(DryRunExhaustedError())


class TestExceptionExtras:
    """Test values stored on specific exceptions."""

    def test_invalid_decision_stores_value(self):
        """The rejected callback result is accessible."""
        error = InvalidDecisionError(value="ook")
        assert error.value == "ook"

    def test_decision_range_stores_value(self):
        """The out-of-range integer is accessible."""
        error = DecisionRangeError(value=42)
        assert error.value == 42

    def test_retry_after_stores_value(self):
        """The malformed header value is accessible."""
        error = RetryAfterError(value="ook")
        assert error.value == "ook"

    def test_value_defaults_to_none(self):
        """value should default to None."""
        assert RetryAfterError().value is None


class TestExceptionInheritance:
    """Test that all exceptions inherit from RetryClientError."""

    @pytest.mark.parametrize(
        "exception_class",
        [
            InvalidOptionError,
            OptionRangeError,
            InvalidDecisionError,
            DecisionRangeError,
            RetryAfterError,
            RetryStateError,
            DryRunExhaustedError,
        ],
    )
    def test_inherits_from_base(self, exception_class):
        """All exception types should be catchable as RetryClientError."""
        error = exception_class("bad")
        assert isinstance(error, RetryClientError)
