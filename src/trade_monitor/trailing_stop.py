"""
Trailing stop calculation.

The stop activates once the trade's profit reaches the configured threshold,
trails price by a configured distance, and only ever moves in the trade's
favor.
"""

from dataclasses import replace

from loguru import logger

from src.core.constants import (
    TRAIL_TIGHTEN_FACTOR,
    TRAIL_WIDEN_FACTOR,
    VOLATILITY_CHANGE_THRESHOLD,
)
from src.core.models.trade_state import TradeState, TrailingStopConfig

from .profit import calculate_current_profit_pct


def calculate_trailing_stop(trade: TradeState, config: TrailingStopConfig) -> float | None:
    """
    Candidate trailing stop price at the trade's current price.

    Two candidates are computed, one ``trail_distance_pct`` behind price and
    one ``min_trail_distance_pct`` behind price; the tighter of the two
    (closer to price) wins. For BUY that is the higher price, for SELL the
    lower.

    Returns:
        Stop price, or None if trailing is disabled or not yet activated
    """
    if not config.enabled:
        return None

    if calculate_current_profit_pct(trade) < config.activation_profit_pct:
        return None

    price = trade.current_price
    if trade.side.is_long:
        trailing_stop_price = price * (1 - config.trail_distance_pct)
        min_distance_stop_price = price * (1 - config.min_trail_distance_pct)
        return max(trailing_stop_price, min_distance_stop_price)

    trailing_stop_price = price * (1 + config.trail_distance_pct)
    min_distance_stop_price = price * (1 + config.min_trail_distance_pct)
    return min(trailing_stop_price, min_distance_stop_price)


def should_update_trailing_stop(trade: TradeState, new_trailing_stop_price: float) -> bool:
    """
    Check whether ``new_trailing_stop_price`` should replace the trade's stop.

    The stop never loosens: a replacement must be strictly higher for BUY
    and strictly lower for SELL. The first stop is always accepted once
    trailing has activated.
    """
    config = trade.trailing_stop_config
    if config is None or not config.enabled:
        return False

    if calculate_current_profit_pct(trade) < config.activation_profit_pct:
        return False

    if trade.current_trailing_stop_price is None:
        return True

    if trade.side.is_long:
        return new_trailing_stop_price > trade.current_trailing_stop_price
    return new_trailing_stop_price < trade.current_trailing_stop_price


def should_trigger_trailing_stop(trade: TradeState) -> bool:
    """Check whether price has crossed the trade's stop against the position."""
    config = trade.trailing_stop_config
    if config is None or not config.enabled or trade.current_trailing_stop_price is None:
        return False

    if trade.side.is_long:
        return trade.current_price <= trade.current_trailing_stop_price
    return trade.current_price >= trade.current_trailing_stop_price


def reconfigure_trailing_stop(
    config: TrailingStopConfig,
    current_volatility: float,
    previous_volatility: float | None = None,
) -> TrailingStopConfig:
    """
    Adapt the trail distance to a large change in volatility.

    A change of at least 50% is significant: a rise beyond 1.5x widens the
    trail by 50%, a fall below 0.5x tightens it by 25% (never below the
    minimum distance).

    Returns:
        A new config, or ``config`` itself when nothing changes
    """
    if previous_volatility is None or previous_volatility == 0:
        return config

    volatility_change = abs((current_volatility - previous_volatility) / previous_volatility)
    if volatility_change < VOLATILITY_CHANGE_THRESHOLD:
        return config

    new_trail_distance_pct = config.trail_distance_pct
    if current_volatility > previous_volatility * (1 + VOLATILITY_CHANGE_THRESHOLD):
        new_trail_distance_pct = config.trail_distance_pct * TRAIL_WIDEN_FACTOR
    elif current_volatility < previous_volatility * (1 - VOLATILITY_CHANGE_THRESHOLD):
        new_trail_distance_pct = max(
            config.min_trail_distance_pct, config.trail_distance_pct * TRAIL_TIGHTEN_FACTOR
        )

    if new_trail_distance_pct == config.trail_distance_pct:
        return config

    logger.info(
        f"Trail distance reconfigured {config.trail_distance_pct} -> {new_trail_distance_pct} "
        f"(volatility {previous_volatility} -> {current_volatility})"
    )
    return replace(config, trail_distance_pct=new_trail_distance_pct)
