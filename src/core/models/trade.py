"""
Trade ledger model.
"""

from dataclasses import dataclass

from src.core.enums import ActionType
from src.core.exceptions.backtest import ValidationError


@dataclass(frozen=True)
class Trade:
    """Represents an executed simulator trade.

    ``price`` is the post-slippage execution price. Only sells carry a
    realized ``pnl``.
    """

    timestamp: int
    action: ActionType
    price: float
    size: float
    fee: float
    pnl: float | None = None

    def __post_init__(self) -> None:
        """Validate trade data after initialization."""
        if self.size <= 0:
            raise ValidationError(f"Size must be positive, got {self.size}")
        if self.price <= 0:
            raise ValidationError(f"Price must be positive, got {self.price}")
        if self.fee < 0:
            raise ValidationError(f"Fee must be non-negative, got {self.fee}")
        if self.action.is_opening and self.pnl is not None:
            raise ValidationError("Buy trades cannot carry realized pnl")

    def notional_value(self) -> float:
        """Calculate the notional value of the trade."""
        return abs(self.size) * self.price

    def to_dict(self) -> dict:
        """Convert trade to dictionary."""
        data = {
            "timestamp": self.timestamp,
            "action": self.action.value,
            "price": self.price,
            "size": self.size,
            "fee": self.fee,
        }
        if self.pnl is not None:
            data["pnl"] = self.pnl
        return data
