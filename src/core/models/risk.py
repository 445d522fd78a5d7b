"""
Risk policy and position sizing models.
"""

from dataclasses import asdict, dataclass

from src.core.exceptions.backtest import ValidationError
from src.core.utils.validation import validate_fraction, validate_non_negative, validate_positive


@dataclass(frozen=True)
class RiskConfig:
    """Immutable risk policy applied when sizing positions.

    Attributes:
        max_leverage: Highest leverage the policy allows
        max_risk_per_trade: Fraction of balance that may be lost on one trade
        max_position_size: Fraction of balance one position may occupy
        min_order_size: Smallest order quantity (base units)
        max_order_size: Largest order quantity (base units)
    """

    max_leverage: float
    max_risk_per_trade: float
    max_position_size: float
    min_order_size: float
    max_order_size: float

    def __post_init__(self) -> None:
        """Validate policy bounds after initialization."""
        validate_positive(self.max_leverage, "max_leverage")
        validate_fraction(self.max_risk_per_trade, "max_risk_per_trade")
        validate_fraction(self.max_position_size, "max_position_size")
        validate_non_negative(self.min_order_size, "min_order_size")
        validate_non_negative(self.max_order_size, "max_order_size")
        if self.min_order_size > self.max_order_size:
            raise ValidationError(
                f"min_order_size ({self.min_order_size}) cannot exceed "
                f"max_order_size ({self.max_order_size})"
            )

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class PositionSizingResult:
    """Result of a sizing calculation.

    ``max_*`` are the hard caps from balance and leverage, ``recommended_*``
    the risk-adjusted size clamped to the policy's order size bounds.
    """

    max_quantity: float
    max_notional: float
    recommended_quantity: float
    recommended_notional: float
    leverage_used: float
    risk_amount: float

    def to_dict(self) -> dict:
        """Convert result to dictionary."""
        return asdict(self)
