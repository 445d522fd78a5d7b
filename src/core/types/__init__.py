"""
Core type definitions and utilities.
"""

# Re-export financial utilities for easy access
from .financial import (
    HUNDRED,
    ONE,
    ZERO,
    clamp,
    directional_return,
    percent_change,
    safe_divide,
    to_percentage,
)

__all__ = [
    # Utility functions
    "safe_divide",
    "to_percentage",
    "percent_change",
    "directional_return",
    "clamp",
    # Constants
    "ZERO",
    "ONE",
    "HUNDRED",
]
