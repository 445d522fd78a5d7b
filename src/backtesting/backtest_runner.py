"""
Candle-by-candle backtest driver.
"""

from collections.abc import Sequence

from loguru import logger

from src.core.enums import Signal
from src.core.interfaces.strategy import IStrategy
from src.core.models.backtest import BacktestConfig, BacktestResult, EquityPoint
from src.core.models.candle import Candle
from src.core.models.portfolio_state import PortfolioState
from src.core.models.risk import RiskConfig
from src.core.protocols import SignalFunction

from .metrics import (
    calculate_benchmark_return,
    calculate_max_drawdown,
    calculate_total_return,
    calculate_trade_statistics,
)
from .portfolio_simulator import PortfolioSimulator


class FunctionStrategy(IStrategy):
    """Adapts a plain signal function to the strategy interface."""

    def __init__(self, func: SignalFunction, name: str | None = None) -> None:
        self._func = func
        self.name = name or getattr(func, "__name__", "FunctionStrategy")

    def on_candle(
        self,
        candle: Candle,
        index: int,
        portfolio: PortfolioState,
        candles: Sequence[Candle] | None = None,
    ) -> Signal | str:
        return self._func(candle, index, portfolio, candles if candles is not None else [])


class BacktestRunner:
    """Drives a PortfolioSimulator through a candle series under a strategy."""

    def __init__(self, risk_config: RiskConfig | None = None) -> None:
        """
        Args:
            risk_config: Sizing policy handed to each simulator (default baseline)
        """
        self.risk_config = risk_config

    def run(
        self,
        strategy: IStrategy | SignalFunction,
        candles: Sequence[Candle],
        config: BacktestConfig,
    ) -> BacktestResult:
        """
        Run a backtest.

        Iteration starts at index 1; candle 0 is history only and is never
        offered to the strategy, so for N candles the strategy is called
        N-1 times. Equity is recorded for every iterated candle whatever
        the signal.

        Args:
            strategy: IStrategy or plain ``(candle, index, state, candles)`` function
            candles: Candles ordered by timestamp
            config: Backtest configuration

        Returns:
            BacktestResult
        """
        if not candles:
            logger.warning("Backtest requested with no candles; returning empty result")
            return BacktestResult(
                total_return=0.0,
                final_equity=config.initial_capital,
                max_drawdown=0.0,
                trades=[],
                equity_curve=[],
                benchmark_return=0.0,
            )

        if not isinstance(strategy, IStrategy):
            strategy = FunctionStrategy(strategy)

        logger.info(
            f"Starting backtest: strategy={strategy.name} symbol={config.symbol} "
            f"candles={len(candles)} capital={config.initial_capital}"
        )

        simulator = PortfolioSimulator(config, self.risk_config)
        equity_curve: list[EquityPoint] = []

        for index in range(1, len(candles)):
            candle = candles[index]
            raw_signal = strategy.on_candle(candle, index, simulator.get_state(), candles)
            self._execute_signal(simulator, raw_signal, candle, index)

            equity_curve.append(
                EquityPoint(timestamp=candle.timestamp, equity=simulator.get_equity(candle.close))
            )

        final_equity = simulator.get_equity(candles[-1].close)
        trades = simulator.get_trades()
        result = BacktestResult(
            total_return=calculate_total_return(final_equity, config.initial_capital),
            final_equity=final_equity,
            max_drawdown=calculate_max_drawdown(equity_curve),
            trades=trades,
            equity_curve=equity_curve,
            benchmark_return=calculate_benchmark_return(candles),
            statistics=calculate_trade_statistics(trades, equity_curve),
        )

        logger.info(
            f"Backtest finished: return={result.total_return:.2f}% "
            f"benchmark={result.benchmark_return:.2f}% drawdown={result.max_drawdown:.2f}% "
            f"trades={len(trades)}"
        )
        return result

    @staticmethod
    def _execute_signal(
        simulator: PortfolioSimulator, raw_signal: Signal | str | None, candle: Candle, index: int
    ) -> None:
        signal = Signal.parse(raw_signal)
        if signal is None:
            logger.warning(f"Ignoring unknown signal {raw_signal!r} at index {index}")
            return

        if signal == Signal.BUY:
            simulator.buy(candle, index)
        elif signal == Signal.SELL:
            simulator.sell(candle, index)
