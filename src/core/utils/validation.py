"""
Validation utilities for core domain models.

Provides consistent validation across the application.
"""

import math

from src.core.exceptions.backtest import ValidationError


def validate_positive(value: float, param_name: str) -> float:
    """Validate that a numeric value is positive and finite.

    Args:
        value: Value to validate
        param_name: Parameter name for error messages

    Returns:
        The validated value

    Raises:
        ValidationError: If value is not positive
    """
    if not math.isfinite(value) or value <= 0:
        raise ValidationError(f"{param_name} must be positive, got {value}")
    return value


def validate_non_negative(value: float, param_name: str) -> float:
    """Validate that a numeric value is zero or positive.

    Raises:
        ValidationError: If value is negative or not finite
    """
    if not math.isfinite(value) or value < 0:
        raise ValidationError(f"{param_name} must be non-negative, got {value}")
    return value


def validate_fraction(value: float, param_name: str) -> float:
    """Validate that a value is a fraction in [0, 1].

    Args:
        value: Value to validate
        param_name: Parameter name for error messages

    Returns:
        The validated fraction

    Raises:
        ValidationError: If value is not between 0 and 1
    """
    if not math.isfinite(value) or value < 0 or value > 1:
        raise ValidationError(f"{param_name} must be between 0 and 1, got {value}")
    return value
