"""
Trade monitor.

Turns a live trade snapshot into the prioritized actions its caller should
execute. Priority:

1. A crossed trailing stop closes the whole remaining quantity and
   preempts everything else.
2. A reached, not yet executed exit level requests a partial exit.
3. An activated trailing stop that can be tightened requests an update.
   2 and 3 may both fire in one evaluation.
4. Otherwise a single no-op is returned.

The caller persists the effects (exited quantity, stop price) before the
next evaluation.
"""

from loguru import logger

from src.core.models.trade_state import (
    NoAction,
    PartialExitAction,
    TradeAction,
    TradeEvaluation,
    TradeState,
    TriggerTrailingStopAction,
    UpdateTrailingStopAction,
)

from .exit_strategy import (
    calculate_exit_quantity,
    get_pending_exit_level,
    should_execute_partial_exit,
)
from .profit import calculate_current_profit_pct
from .trailing_stop import (
    calculate_trailing_stop,
    should_trigger_trailing_stop,
    should_update_trailing_stop,
)


def _partial_exit_action(trade: TradeState) -> PartialExitAction | None:
    level = get_pending_exit_level(trade)
    if level is None or not should_execute_partial_exit(trade, level):
        return None

    quantity = calculate_exit_quantity(trade, level)
    if quantity <= 0:
        return None
    return PartialExitAction(level=level, quantity=quantity)


def _trailing_update_action(trade: TradeState) -> UpdateTrailingStopAction | None:
    config = trade.trailing_stop_config
    if config is None or not config.enabled:
        return None

    new_stop = calculate_trailing_stop(trade, config)
    if new_stop is None or not should_update_trailing_stop(trade, new_stop):
        return None
    return UpdateTrailingStopAction(new_trailing_stop_price=new_stop)


def evaluate_trade(trade: TradeState) -> TradeEvaluation:
    """
    Decide what the trade requires at its current price.

    Args:
        trade: Snapshot of the trade

    Returns:
        TradeEvaluation with at least one action
    """
    current_profit_pct = calculate_current_profit_pct(trade)
    remaining_quantity = trade.remaining_quantity

    if should_trigger_trailing_stop(trade):
        logger.info(
            f"Trade {trade.id}: trailing stop {trade.current_trailing_stop_price} hit "
            f"at {trade.current_price}, exiting {remaining_quantity}"
        )
        return TradeEvaluation(
            actions=[TriggerTrailingStopAction(quantity=remaining_quantity)],
            current_profit_pct=current_profit_pct,
            remaining_quantity=remaining_quantity,
        )

    actions: list[TradeAction] = []

    partial_exit = _partial_exit_action(trade)
    if partial_exit is not None:
        logger.info(
            f"Trade {trade.id}: exit level {partial_exit.level.profit_pct:.4f} reached, "
            f"exiting {partial_exit.quantity}"
        )
        actions.append(partial_exit)

    trailing_update = _trailing_update_action(trade)
    if trailing_update is not None:
        logger.debug(
            f"Trade {trade.id}: trailing stop -> {trailing_update.new_trailing_stop_price}"
        )
        actions.append(trailing_update)

    if not actions:
        actions.append(NoAction())

    return TradeEvaluation(
        actions=actions,
        current_profit_pct=current_profit_pct,
        remaining_quantity=remaining_quantity,
    )


def get_trade_actions(trade: TradeState) -> list[TradeAction]:
    """Actions for ``trade``; shorthand for ``evaluate_trade(trade).actions``."""
    return evaluate_trade(trade).actions
