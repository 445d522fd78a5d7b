"""Helper models and calculators for simulated order execution."""

from dataclasses import dataclass

from src.core.constants import BASIS_POINTS
from src.core.enums import ActionType


@dataclass(frozen=True)
class TradeValidation:
    """Eligibility check outcome; ``error`` explains a rejection."""

    valid: bool
    error: str | None = None

    @classmethod
    def ok(cls) -> "TradeValidation":
        return cls(valid=True)

    @classmethod
    def reject(cls, error: str) -> "TradeValidation":
        return cls(valid=False, error=error)


@dataclass(frozen=True)
class ExecutionResult:
    """Outcome of a buy/sell attempt. Rejections are values, not exceptions."""

    success: bool
    error: str | None = None

    @classmethod
    def ok(cls) -> "ExecutionResult":
        return cls(success=True)

    @classmethod
    def reject(cls, error: str | None) -> "ExecutionResult":
        return cls(success=False, error=error)


class SlippageModel:
    """Moves execution prices against the trader by a fixed number of basis points."""

    def __init__(self, slippage_bps: float) -> None:
        self.slippage_bps = slippage_bps

    def execution_price(self, price: float, action: ActionType) -> float:
        """Buys fill above the reference price, sells below it."""
        adjustment = self.slippage_bps / BASIS_POINTS
        if action == ActionType.BUY:
            return price * (1 + adjustment)
        return price * (1 - adjustment)


class FeeCalculator:
    """Calculates trading fees as a flat rate of notional."""

    def __init__(self, fee_rate: float) -> None:
        self.fee_rate = fee_rate

    def calculate_fee(self, notional_value: float) -> float:
        """Calculate trading fee."""
        return notional_value * self.fee_rate
