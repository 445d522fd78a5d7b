"""
Backtest configuration and results models.
"""

import math
from dataclasses import asdict, dataclass, field

import pandas as pd

from src.core.constants import (
    DEFAULT_FEE_RATE,
    DEFAULT_SLIPPAGE_BPS,
    DEFAULT_SYMBOL,
    DEFAULT_TIMEFRAME_MS,
)

from .trade import Trade


@dataclass
class BacktestConfig:
    """Configuration for a backtest execution."""

    initial_capital: float
    fee_rate: float = DEFAULT_FEE_RATE
    slippage_bps: float = DEFAULT_SLIPPAGE_BPS
    symbol: str = DEFAULT_SYMBOL
    timeframe_ms: int = DEFAULT_TIMEFRAME_MS

    def is_valid_capital(self) -> bool:
        """Validate initial capital is positive."""
        return self.initial_capital > 0

    def is_valid_fee_rate(self) -> bool:
        """Validate fee rate is a fraction below 100%."""
        return 0.0 <= self.fee_rate < 1.0

    def is_valid_slippage(self) -> bool:
        """Validate slippage is non-negative and below 100%."""
        return 0.0 <= self.slippage_bps < 10000.0

    def is_valid(self) -> bool:
        """Check every configuration constraint."""
        return (
            self.is_valid_capital()
            and self.is_valid_fee_rate()
            and self.is_valid_slippage()
            and bool(self.symbol)
            and self.timeframe_ms > 0
        )

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class EquityPoint:
    """Mark-to-market portfolio value at a candle."""

    timestamp: int
    equity: float


@dataclass(frozen=True)
class TradeStatistics:
    """Per-trade performance statistics over closed (sell) trades."""

    total_trades: int = 0
    closed_trades: int = 0
    winning_trades: int = 0
    losing_trades: int = 0
    win_rate: float = 0.0
    profit_factor: float = 0.0
    avg_win: float = 0.0
    avg_loss: float = 0.0
    largest_win: float = 0.0
    largest_loss: float = 0.0
    sharpe_ratio: float = 0.0
    avg_trade_duration: float = 0.0  # ms from buy to matching sell

    def to_dict(self) -> dict:
        """Convert statistics to dictionary."""
        return asdict(self)


@dataclass
class BacktestResult:
    """Results from a backtest execution.

    ``total_return``, ``max_drawdown`` and ``benchmark_return`` are percentages.
    """

    total_return: float
    final_equity: float
    max_drawdown: float
    trades: list[Trade]
    equity_curve: list[EquityPoint]
    benchmark_return: float
    statistics: TradeStatistics = field(default_factory=TradeStatistics)

    def is_profitable(self) -> bool:
        """Check if the backtest was profitable."""
        return self.total_return > 0.0

    def outperformed_benchmark(self) -> bool:
        """Check if the strategy beat buy-and-hold."""
        return self.total_return > self.benchmark_return

    def performance_summary(self) -> dict:
        """Get a summary of key performance metrics."""
        return {
            "total_return": self.total_return,
            "final_equity": self.final_equity,
            "max_drawdown": self.max_drawdown,
            "benchmark_return": self.benchmark_return,
            "excess_return": self.total_return - self.benchmark_return,
            "total_trades": len(self.trades),
            "win_rate": self.statistics.win_rate,
            "sharpe_ratio": self.statistics.sharpe_ratio,
            "avg_trade_duration": self.statistics.avg_trade_duration,
        }

    def equity_frame(self) -> pd.DataFrame:
        """Equity curve as a DataFrame indexed by UTC datetime."""
        frame = pd.DataFrame(
            [asdict(point) for point in self.equity_curve], columns=["timestamp", "equity"]
        )
        frame.index = pd.to_datetime(frame["timestamp"], unit="ms", utc=True)
        return frame

    def to_dict(self) -> dict:
        """Convert results to dictionary."""
        profit_factor = self.statistics.profit_factor
        statistics = self.statistics.to_dict()
        if math.isinf(profit_factor):
            statistics["profit_factor"] = None
        return {
            "total_return": self.total_return,
            "final_equity": self.final_equity,
            "max_drawdown": self.max_drawdown,
            "benchmark_return": self.benchmark_return,
            "statistics": statistics,
            "trades": [trade.to_dict() for trade in self.trades],
            "equity_curve": [asdict(point) for point in self.equity_curve],
        }
