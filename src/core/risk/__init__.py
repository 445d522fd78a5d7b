"""
Risk engine: position sizing and leverage checks.
"""

from .position_sizing import (
    calculate_futures_position_size,
    calculate_max_position_size,
    calculate_spot_position_size,
    get_default_risk_config,
    validate_leverage,
)

__all__ = [
    "calculate_max_position_size",
    "calculate_spot_position_size",
    "calculate_futures_position_size",
    "validate_leverage",
    "get_default_risk_config",
]
