"""Directional profit of a live trade."""

from src.core.models.trade_state import TradeState
from src.core.types.financial import directional_return


def calculate_current_profit_pct(trade: TradeState) -> float:
    """Profit fraction at the trade's current price (BUY gains when price rises)."""
    return directional_return(trade.entry_price, trade.current_price, trade.side.is_long)
