"""
SMA crossover strategy.

Buys on a golden cross (fast SMA crosses above slow SMA) and sells on a
death cross (fast SMA crosses below slow SMA).
"""

from collections.abc import Sequence

import pandas as pd

from src.core.enums import Signal
from src.core.exceptions.backtest import ValidationError
from src.core.interfaces.strategy import IStrategy
from src.core.models.candle import Candle
from src.core.models.portfolio_state import PortfolioState

from .indicators import closes_until, simple_moving_average


class SmaCrossoverStrategy(IStrategy):
    """Stateless moving-average crossover.

    Averages are recomputed from the candle history passed by the runner,
    using closes up to and including the current index only.
    """

    def __init__(self, fast_period: int = 20, slow_period: int = 50) -> None:
        if fast_period <= 0 or slow_period <= 0:
            raise ValidationError("SMA periods must be positive")
        if fast_period >= slow_period:
            raise ValidationError(
                f"fast_period ({fast_period}) must be shorter than slow_period ({slow_period})"
            )
        self.fast_period = fast_period
        self.slow_period = slow_period
        self.name = "SMA Crossover"

    def on_candle(
        self,
        candle: Candle,
        index: int,
        portfolio: PortfolioState,
        candles: Sequence[Candle] | None = None,
    ) -> Signal:
        # A crossover needs two consecutive slow averages
        if not candles or index < self.slow_period:
            return Signal.HOLD

        closes = closes_until(candles, index)
        fast = simple_moving_average(closes, self.fast_period)
        slow = simple_moving_average(closes, self.slow_period)

        prev_fast, cur_fast = fast.iloc[-2], fast.iloc[-1]
        prev_slow, cur_slow = slow.iloc[-2], slow.iloc[-1]
        if pd.isna(prev_slow) or pd.isna(cur_slow):
            return Signal.HOLD

        if prev_fast <= prev_slow and cur_fast > cur_slow:
            return Signal.BUY
        if prev_fast >= prev_slow and cur_fast < cur_slow:
            return Signal.SELL
        return Signal.HOLD
