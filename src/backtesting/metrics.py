"""
Backtest performance metrics.

Pure functions over an equity curve, a candle series and a trade ledger.
Empty or degenerate inputs resolve to zero rather than NaN.
"""

from collections.abc import Sequence

import numpy as np

from src.core.constants import TRADING_DAYS_PER_YEAR
from src.core.enums import ActionType
from src.core.models.backtest import EquityPoint, TradeStatistics
from src.core.models.candle import Candle
from src.core.models.trade import Trade
from src.core.types.financial import percent_change, safe_divide, to_percentage


def calculate_total_return(final_equity: float, initial_capital: float) -> float:
    """Percentage return of ``final_equity`` over ``initial_capital``."""
    return percent_change(initial_capital, final_equity)


def calculate_max_drawdown(equity_curve: Sequence[EquityPoint]) -> float:
    """
    Largest peak-to-trough drop of the equity curve, as a percentage.

    Returns:
        Max drawdown in percent; 0 for an empty or non-decreasing curve
    """
    if not equity_curve:
        return 0.0

    equity = np.array([point.equity for point in equity_curve], dtype=float)
    running_peak = np.maximum.accumulate(equity)
    with np.errstate(divide="ignore", invalid="ignore"):
        drawdowns = np.where(running_peak > 0, (running_peak - equity) / running_peak, 0.0)

    return to_percentage(float(drawdowns.max()))


def calculate_benchmark_return(candles: Sequence[Candle]) -> float:
    """
    Buy-and-hold return from the first to the last close, as a percentage.

    Returns:
        0 with fewer than two candles or a zero first close
    """
    if len(candles) < 2:
        return 0.0
    return percent_change(candles[0].close, candles[-1].close)


def calculate_trade_statistics(
    trades: Sequence[Trade], equity_curve: Sequence[EquityPoint] = ()
) -> TradeStatistics:
    """
    Win/loss statistics over the closing trades of a ledger.

    Args:
        trades: Trade ledger; only trades carrying a realized pnl are scored
        equity_curve: Equity curve used for the sharpe ratio

    Returns:
        TradeStatistics. Profit factor is ``inf`` when there are wins but no
        losses, and 0 when there are neither.
    """
    closed = [
        trade.pnl for trade in trades if trade.action.is_closing and trade.pnl is not None
    ]
    if not closed:
        return TradeStatistics(
            total_trades=len(trades),
            sharpe_ratio=calculate_sharpe_ratio(equity_curve),
        )

    wins = [pnl for pnl in closed if pnl > 0]
    losses = [pnl for pnl in closed if pnl < 0]

    gross_profit = sum(wins, 0.0)
    gross_loss = abs(sum(losses, 0.0))
    if gross_loss > 0:
        profit_factor = gross_profit / gross_loss
    else:
        profit_factor = float("inf") if gross_profit > 0 else 0.0

    return TradeStatistics(
        total_trades=len(trades),
        closed_trades=len(closed),
        winning_trades=len(wins),
        losing_trades=len(losses),
        win_rate=to_percentage(safe_divide(len(wins), len(closed))),
        profit_factor=profit_factor,
        avg_win=safe_divide(gross_profit, len(wins)),
        avg_loss=safe_divide(-gross_loss, len(losses)),
        largest_win=max(wins, default=0.0),
        largest_loss=min(losses, default=0.0),
        sharpe_ratio=calculate_sharpe_ratio(equity_curve),
        avg_trade_duration=calculate_avg_trade_duration(trades),
    )


def calculate_sharpe_ratio(equity_curve: Sequence[EquityPoint]) -> float:
    """
    Annualized sharpe ratio of the per-step percentage returns.

    Steps from a non-positive equity are skipped. The ratio is
    ``mean * 252 / (std * sqrt(252))`` with the population standard deviation.

    Returns:
        0 with fewer than two points or a flat return series
    """
    if len(equity_curve) < 2:
        return 0.0

    equity = np.array([point.equity for point in equity_curve], dtype=float)
    previous, current = equity[:-1], equity[1:]
    valid = previous > 0
    if not valid.any():
        return 0.0

    returns = (current[valid] - previous[valid]) / previous[valid] * 100
    std = float(np.std(returns))
    if std == 0:
        return 0.0

    return float(np.mean(returns) * TRADING_DAYS_PER_YEAR / (std * np.sqrt(TRADING_DAYS_PER_YEAR)))


def calculate_avg_trade_duration(trades: Sequence[Trade]) -> float:
    """Mean time in milliseconds from a buy to the sell that closes it; 0 without round trips."""
    durations = []
    entry_timestamp = None
    for trade in trades:
        if trade.action == ActionType.BUY:
            entry_timestamp = trade.timestamp
        elif trade.action == ActionType.SELL and entry_timestamp is not None:
            durations.append(trade.timestamp - entry_timestamp)
            entry_timestamp = None

    if not durations:
        return 0.0
    return float(np.mean(durations))
