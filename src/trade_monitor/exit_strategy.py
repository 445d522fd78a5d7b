"""
Multi-level partial exit planning.

A plan splits the position evenly across 2-5 levels. The first level sits
at 30% of the take-profit distance, the rest are evenly spaced up to the
take-profit, and the last level is pinned to the take-profit exactly.
"""

from loguru import logger

from src.core.constants import (
    FIRST_EXIT_FRACTION,
    FLOAT_TOLERANCE,
    HIGH_VOLATILITY_THRESHOLD,
    LOW_VOLATILITY_THRESHOLD,
    MAX_EXIT_LEVELS,
    MEDIUM_TP_THRESHOLD,
    MIN_EXIT_LEVELS,
    SMALL_TP_THRESHOLD,
)
from src.core.models.trade_state import ExitLevel, ExitStrategy, TradeState
from src.core.utils.validation import validate_positive

from .profit import calculate_current_profit_pct


def _level_count(tp_pct: float, volatility: float | None) -> int:
    """Number of exit levels for a take-profit size and optional volatility."""
    if tp_pct < SMALL_TP_THRESHOLD:
        num_levels = 2
    elif tp_pct < MEDIUM_TP_THRESHOLD:
        num_levels = 3
    else:
        num_levels = 4

    if volatility is not None:
        if volatility > HIGH_VOLATILITY_THRESHOLD:
            num_levels = max(MIN_EXIT_LEVELS, num_levels - 1)
        elif volatility < LOW_VOLATILITY_THRESHOLD:
            num_levels = min(MAX_EXIT_LEVELS, num_levels + 1)

    return num_levels


def calculate_exit_strategy(tp_pct: float, volatility: float | None = None) -> ExitStrategy:
    """
    Derive an evenly weighted partial-exit plan from a take-profit.

    Args:
        tp_pct: Take-profit as a fraction of entry price (0.05 == 5%)
        volatility: Optional volatility fraction; high volatility removes a
            level, low volatility adds one (bounded to 2-5 levels)

    Returns:
        ExitStrategy whose quantity fractions sum to 1 and whose last level
        targets exactly ``tp_pct``

    Raises:
        ValidationError: If tp_pct is not positive
    """
    validate_positive(tp_pct, "tp_pct")

    num_levels = _level_count(tp_pct, volatility)
    quantity_per_level = 1.0 / num_levels

    first_exit_pct = tp_pct * FIRST_EXIT_FRACTION
    spacing = (tp_pct - first_exit_pct) / (num_levels - 1)

    profit_targets = [first_exit_pct + spacing * i for i in range(num_levels)]
    profit_targets[-1] = tp_pct

    levels = tuple(
        ExitLevel(profit_pct=target, quantity_pct=quantity_per_level) for target in profit_targets
    )
    logger.debug(f"Planned {num_levels} exit levels for tp={tp_pct} volatility={volatility}")
    return ExitStrategy(levels=levels, auto_calculated=True)


def get_next_exit_level(trade: TradeState) -> ExitLevel | None:
    """
    First planned level not yet reached that still fits the open quantity.

    Levels are scanned in plan order; a level qualifies when its profit
    target is above the current profit and its quantity fraction does not
    exceed the fraction of the position still open.

    Returns:
        The level, or None if there is no plan or no level qualifies
    """
    if trade.exit_strategy is None or not trade.exit_strategy.levels:
        return None

    current_profit_pct = calculate_current_profit_pct(trade)
    remaining_quantity_pct = trade.remaining_quantity_pct

    for level in trade.exit_strategy.levels:
        if level.profit_pct > current_profit_pct and level.quantity_pct <= remaining_quantity_pct:
            return level

    return None


def should_execute_partial_exit(trade: TradeState, level: ExitLevel) -> bool:
    """Check that profit reached the level's target and enough quantity is still open."""
    current_profit_pct = calculate_current_profit_pct(trade)
    return (
        current_profit_pct >= level.profit_pct
        and trade.remaining_quantity_pct >= level.quantity_pct
    )


def calculate_exit_quantity(trade: TradeState, level: ExitLevel) -> float:
    """Quantity to close at ``level``; never more than what is still open."""
    remaining_quantity = trade.remaining_quantity
    return min(remaining_quantity * level.quantity_pct, remaining_quantity)


def count_executed_levels(trade: TradeState) -> int:
    """
    Number of plan levels already executed, inferred from ``exited_quantity``.

    Each level closes its fraction of what was still open, so after ``k``
    levels the exited fraction is ``1 - prod(1 - quantity_pct)`` over those
    levels. Fills are often rounded to a lot size, so level ``k`` counts as
    executed once the exited fraction passes the midpoint between the
    expected fractions after ``k - 1`` and ``k`` levels.
    """
    if trade.exit_strategy is None:
        return 0

    exited_fraction = trade.exited_quantity / trade.quantity
    still_open = 1.0
    executed = 0
    for level in trade.exit_strategy.levels:
        before = 1.0 - still_open
        still_open *= 1.0 - level.quantity_pct
        after = 1.0 - still_open
        if exited_fraction + FLOAT_TOLERANCE < (before + after) / 2:
            break
        executed += 1
    return executed


def get_pending_exit_level(trade: TradeState) -> ExitLevel | None:
    """
    First plan level that has not been executed yet, in plan order.

    Unlike ``get_next_exit_level`` this ignores the current price, so a level
    whose target was already reached is still returned until it is executed.

    Returns:
        The level, or None when every level is executed or the remaining
        quantity no longer covers the level's fraction
    """
    if trade.exit_strategy is None or not trade.exit_strategy.levels:
        return None

    executed = count_executed_levels(trade)
    if executed >= len(trade.exit_strategy.levels):
        return None

    level = trade.exit_strategy.levels[executed]
    if level.quantity_pct > trade.remaining_quantity_pct + FLOAT_TOLERANCE:
        return None
    return level
