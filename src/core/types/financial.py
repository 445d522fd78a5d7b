"""
Financial helpers for high-performance simulation calculations.

All amounts are plain floats. Float64 gives ~15-16 significant digits,
which is plenty for simulated fills but not for real-money accounting.

Degenerate inputs (zero denominators, non-finite prices) resolve to
neutral values instead of raising or producing NaN.
"""

import math

# Common financial values as float constants
ZERO = 0.0
ONE = 1.0
HUNDRED = 100.0


def safe_divide(numerator: float, denominator: float, default: float = ZERO) -> float:
    """Divide, returning ``default`` when the denominator is zero or non-finite.

    Examples:
        >>> safe_divide(10.0, 4.0)
        2.5
        >>> safe_divide(10.0, 0.0)
        0.0
    """
    if denominator == ZERO or not math.isfinite(denominator):
        return default
    return numerator / denominator


def to_percentage(ratio: float) -> float:
    """Convert a ratio (0.1) to a percentage (10.0)."""
    return ratio * HUNDRED


def percent_change(start: float, end: float) -> float:
    """Percentage change from ``start`` to ``end``; 0 when ``start`` is 0.

    Examples:
        >>> percent_change(50000.0, 55000.0)
        10.0
    """
    return to_percentage(safe_divide(end - start, start))


def directional_return(entry_price: float, current_price: float, is_long: bool) -> float:
    """Profit fraction of a position relative to its entry price.

    Args:
        entry_price: Price the position was entered at
        current_price: Current market price
        is_long: True if the position profits from rising prices

    Returns:
        Profit as a fraction of entry price (0.02 == 2%), 0 when the entry
        price is not a positive finite number
    """
    if entry_price <= ZERO or not math.isfinite(entry_price):
        return ZERO

    if is_long:
        return (current_price - entry_price) / entry_price
    return (entry_price - current_price) / entry_price


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp ``value`` into ``[lower, upper]``."""
    return max(lower, min(upper, value))
