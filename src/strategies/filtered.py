"""
Composed strategies: a base strategy gated by market filters.
"""

from collections.abc import Sequence

from src.core.enums import Signal
from src.core.interfaces.strategy import IStrategy
from src.core.models.candle import Candle
from src.core.models.portfolio_state import PortfolioState
from src.core.protocols import MarketFilter

from .indicators import closes_until, simple_moving_average


class FilteredStrategy(IStrategy):
    """Wraps a strategy and holds whenever any filter blocks trading."""

    def __init__(self, base_strategy: IStrategy, filters: Sequence[MarketFilter]) -> None:
        self.base_strategy = base_strategy
        self.filters = list(filters)
        self.name = f"Filtered({base_strategy.name})"

    def on_candle(
        self,
        candle: Candle,
        index: int,
        portfolio: PortfolioState,
        candles: Sequence[Candle] | None = None,
    ) -> Signal | str:
        # Filters need history; without it the base strategy decides alone
        if candles:
            for market_filter in self.filters:
                if not market_filter.should_trade(candle, index, candles):
                    return Signal.HOLD

        return self.base_strategy.on_candle(candle, index, portfolio, candles)


class TrendFilter:
    """Allows trading only while price closes above its long-period SMA."""

    def __init__(self, period: int = 200) -> None:
        self.period = period

    def should_trade(self, candle: Candle, index: int, candles: Sequence[Candle]) -> bool:
        if index < self.period:
            return False  # Not enough history

        sma = simple_moving_average(closes_until(candles, index), self.period).iloc[-1]
        return bool(candle.close > sma)
