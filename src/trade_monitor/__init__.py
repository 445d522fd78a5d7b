"""
Live trade monitoring: partial exit planning, trailing stops and action evaluation.
"""

from .exit_strategy import (
    calculate_exit_quantity,
    calculate_exit_strategy,
    get_next_exit_level,
    get_pending_exit_level,
    should_execute_partial_exit,
)
from .monitor import evaluate_trade, get_trade_actions
from .profit import calculate_current_profit_pct
from .trailing_stop import (
    calculate_trailing_stop,
    reconfigure_trailing_stop,
    should_trigger_trailing_stop,
    should_update_trailing_stop,
)

__all__ = [
    "calculate_current_profit_pct",
    "calculate_exit_strategy",
    "get_next_exit_level",
    "get_pending_exit_level",
    "should_execute_partial_exit",
    "calculate_exit_quantity",
    "calculate_trailing_stop",
    "should_update_trailing_stop",
    "should_trigger_trailing_stop",
    "reconfigure_trailing_stop",
    "evaluate_trade",
    "get_trade_actions",
]
