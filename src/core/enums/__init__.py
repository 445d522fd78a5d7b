"""
Core enumerations for the trading engine.

This module provides centralized enumerations for domain concepts
like trade sides, ledger actions, strategy signals and monitor actions.
"""

from .position_types import ActionType, TradeActionType, TradeSide
from .signals import Signal

__all__ = ["ActionType", "Signal", "TradeActionType", "TradeSide"]
