"""
Single-position portfolio simulator.

The simulator is a two-state machine: flat (no position) and open. ``buy``
moves flat to open, ``sell`` moves open to flat; every other request is
rejected with an ``ExecutionResult`` instead of raising. It is meant for
sequential use within one backtest run and is not safe for concurrent
mutation.
"""

import math

from loguru import logger

from src.core.enums import ActionType
from src.core.models.backtest import BacktestConfig
from src.core.models.candle import Candle
from src.core.models.portfolio_state import PortfolioState
from src.core.models.risk import RiskConfig
from src.core.models.trade import Trade
from src.core.risk.position_sizing import calculate_spot_position_size, get_default_risk_config
from src.core.utils.decorators import log_trades

from .execution_helpers import ExecutionResult, FeeCalculator, SlippageModel, TradeValidation


def _is_valid_price(price: float) -> bool:
    return math.isfinite(price) and price > 0


class PortfolioSimulator:
    """Simulates spot fills with fees and slippage for one symbol.

    Position size is chosen by the risk engine at the candle's close;
    fills happen at the close adjusted for slippage.
    """

    def __init__(self, config: BacktestConfig, risk_config: RiskConfig | None = None) -> None:
        """Initialize a flat portfolio holding ``config.initial_capital``.

        Args:
            config: Backtest configuration (capital, costs, symbol)
            risk_config: Sizing policy (default baseline if omitted)
        """
        self.config = config
        self.risk_config = risk_config if risk_config is not None else get_default_risk_config()
        self._state = PortfolioState(balance=config.initial_capital)
        self._trades: list[Trade] = []
        self._slippage = SlippageModel(config.slippage_bps)
        self._fees = FeeCalculator(config.fee_rate)

    def get_state(self) -> PortfolioState:
        """Return a snapshot of the current state."""
        return self._state.copy()

    def get_trades(self) -> list[Trade]:
        """Return a copy of the trade ledger."""
        return list(self._trades)

    def get_equity(self, current_price: float) -> float:
        """Mark-to-market equity: cash plus the open position at ``current_price``."""
        return self._state.balance + self._state.position_size * current_price

    def validate_trade(
        self, action: ActionType | str, price: float, symbol: str
    ) -> TradeValidation:
        """
        Check whether a trade could be executed, without executing it.

        Args:
            action: "buy" or "sell"
            price: Reference price; must be positive and finite
            symbol: Symbol the trade would be placed on

        Returns:
            TradeValidation with the rejection reason, if any
        """
        try:
            action = ActionType(action)
        except ValueError:
            return TradeValidation.reject(f"Unknown action: {action}")

        if action == ActionType.BUY:
            return self._validate_buy(price, symbol)
        return self._validate_sell(price, symbol)

    def _validate_buy(self, price: float, symbol: str) -> TradeValidation:
        if self._state.position_size > 0:
            return TradeValidation.reject("Position already open")

        if symbol != self.config.symbol:
            return TradeValidation.reject(f"Symbol mismatch: expected {self.config.symbol}")

        if not _is_valid_price(price):
            return TradeValidation.reject("Invalid price")

        sizing = calculate_spot_position_size(self._state.balance, price, self.risk_config)
        if sizing.recommended_notional > self._state.balance:
            return TradeValidation.reject("Insufficient balance")

        return TradeValidation.ok()

    def _validate_sell(self, price: float, symbol: str) -> TradeValidation:
        if self._state.position_size == 0:
            return TradeValidation.reject("No position to sell")

        if self._state.position_symbol != symbol:
            return TradeValidation.reject("Symbol mismatch")

        if not _is_valid_price(price):
            return TradeValidation.reject("Invalid price")

        return TradeValidation.ok()

    def _candle_symbol(self, candle: Candle) -> str:
        """Symbol context of a candle; feeds without one belong to the configured symbol."""
        return candle.symbol if candle.symbol is not None else self.config.symbol

    @log_trades
    def buy(self, candle: Candle, index: int) -> ExecutionResult:
        """
        Open a position at the candle's close.

        Args:
            candle: Candle to execute against
            index: Position of the candle in the series

        Returns:
            ExecutionResult; the state is unchanged on rejection
        """
        validation = self.validate_trade(ActionType.BUY, candle.close, self._candle_symbol(candle))
        if not validation.valid:
            return ExecutionResult.reject(validation.error)

        sizing = calculate_spot_position_size(
            self._state.balance, candle.close, self.risk_config
        )
        notional = sizing.recommended_notional

        execution_price = self._slippage.execution_price(candle.close, ActionType.BUY)
        fee = self._fees.calculate_fee(notional)

        total_cost = notional + fee
        if total_cost > self._state.balance:
            return ExecutionResult.reject("Insufficient balance after fees")

        position_size = notional / execution_price
        self._state.balance -= total_cost
        self._state.position_size = position_size
        self._state.position_symbol = self.config.symbol
        self._state.entry_price = execution_price
        self._state.last_trade_index = index

        self._trades.append(
            Trade(
                timestamp=candle.timestamp,
                action=ActionType.BUY,
                price=execution_price,
                size=position_size,
                fee=fee,
            )
        )
        logger.info(
            f"BUY {position_size:.8f} {self.config.symbol} @ {execution_price:.2f} "
            f"(fee={fee:.4f}, balance={self._state.balance:.2f})"
        )
        return ExecutionResult.ok()

    @log_trades
    def sell(self, candle: Candle, index: int) -> ExecutionResult:
        """
        Close the open position at the candle's close.

        Args:
            candle: Candle to execute against
            index: Position of the candle in the series

        Returns:
            ExecutionResult; the state is unchanged on rejection
        """
        validation = self.validate_trade(ActionType.SELL, candle.close, self._candle_symbol(candle))
        if not validation.valid:
            return ExecutionResult.reject(validation.error)

        entry_price = self._state.entry_price
        if entry_price is None:
            return ExecutionResult.reject("No entry price recorded")

        position_size = self._state.position_size
        execution_price = self._slippage.execution_price(candle.close, ActionType.SELL)

        notional = position_size * execution_price
        fee = self._fees.calculate_fee(notional)
        proceeds = notional - fee
        pnl = proceeds - position_size * entry_price

        self._trades.append(
            Trade(
                timestamp=candle.timestamp,
                action=ActionType.SELL,
                price=execution_price,
                size=position_size,
                fee=fee,
                pnl=pnl,
            )
        )

        self._state.balance += proceeds
        self._state.position_size = 0.0
        self._state.position_symbol = None
        self._state.entry_price = None
        self._state.last_trade_index = index

        logger.info(
            f"SELL {position_size:.8f} {self.config.symbol} @ {execution_price:.2f} "
            f"(pnl={pnl:.4f}, balance={self._state.balance:.2f})"
        )
        return ExecutionResult.ok()
