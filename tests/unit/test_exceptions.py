"""
Unit tests for custom exceptions.
Testing the exception hierarchy and attributes.
"""

import pytest

from src.core.exceptions.backtest import (
    BacktestException,
    ConfigurationError,
    InvalidLeverageError,
    StrategyError,
    ValidationError,
)


class TestBacktestException:
    """Tests for BacktestException base class."""

    def test_should_create_base_exception_with_message(self) -> None:
        """Test creating base exception with message."""
        exc = BacktestException("Test error message")
        assert str(exc) == "Test error message"
        assert isinstance(exc, Exception)

    @pytest.mark.parametrize("exc_type", [ValidationError, StrategyError, ConfigurationError])
    def test_should_derive_engine_errors_from_base(self, exc_type: type) -> None:
        """Test every engine error can be caught as BacktestException."""
        with pytest.raises(BacktestException, match="boom"):
            raise exc_type("boom")


class TestValidationError:
    """Tests for ValidationError."""

    def test_should_handle_field_specific_validation(self) -> None:
        """Test validation error with field information."""
        exc = ValidationError("Price must be positive, got -100")
        assert "Price" in str(exc)
        assert "-100" in str(exc)


class TestInvalidLeverageError:
    """Tests for InvalidLeverageError."""

    def test_should_create_invalid_leverage_error(self) -> None:
        """Test attributes and hierarchy."""
        exc = InvalidLeverageError(leverage=15.0, max_leverage=10.0)

        assert exc.leverage == 15.0
        assert exc.max_leverage == 10.0
        assert isinstance(exc, ValidationError)
        assert isinstance(exc, BacktestException)

    def test_should_format_error_message_with_details(self) -> None:
        """Test that error message includes leverage and limit."""
        exc = InvalidLeverageError(leverage=15.0, max_leverage=10.0)

        assert str(exc) == "Leverage 15.0 exceeds maximum 10.0"
