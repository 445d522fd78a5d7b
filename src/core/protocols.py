"""
Core type definitions and protocols.

Structural interfaces for pluggable strategy components.
"""

from collections.abc import Callable, Sequence
from typing import Protocol

from src.core.enums import Signal
from src.core.models.candle import Candle
from src.core.models.portfolio_state import PortfolioState


class MarketFilter(Protocol):
    """Protocol for filters that gate trading on market conditions."""

    def should_trade(self, candle: Candle, index: int, candles: Sequence[Candle]) -> bool:
        """Return False to block trading on this candle."""
        ...


# Plain callable strategies accepted by the backtest runner
SignalFunction = Callable[[Candle, int, PortfolioState, Sequence[Candle]], Signal | str]
