"""
Backtesting engine: portfolio simulation, backtest driver and metrics.
"""

from .backtest_runner import BacktestRunner, FunctionStrategy
from .execution_helpers import ExecutionResult, TradeValidation
from .portfolio_simulator import PortfolioSimulator

__all__ = [
    "BacktestRunner",
    "FunctionStrategy",
    "PortfolioSimulator",
    "ExecutionResult",
    "TradeValidation",
]
