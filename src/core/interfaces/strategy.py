"""
Strategy interface definition.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from src.core.enums import Signal
from src.core.models.candle import Candle
from src.core.models.portfolio_state import PortfolioState


class IStrategy(ABC):
    """Abstract interface for trading strategies.

    A strategy is an opaque policy: for each candle it returns a signal
    telling the backtest runner to buy, sell or hold.
    """

    name: str = "Strategy"

    @abstractmethod
    def on_candle(
        self,
        candle: Candle,
        index: int,
        portfolio: PortfolioState,
        candles: Sequence[Candle] | None = None,
    ) -> Signal | str:
        """Called for each candle; ``candles`` is the full series for history lookups."""
        pass
