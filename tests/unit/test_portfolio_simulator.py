"""
Unit tests for PortfolioSimulator.
Testing the flat/open state machine, fills with fees and slippage, and rejections.
"""

import pytest

from src.backtesting.portfolio_simulator import PortfolioSimulator
from src.core.enums import ActionType
from src.core.models.backtest import BacktestConfig
from src.core.models.candle import Candle


def make_config(**overrides: object) -> BacktestConfig:
    values: dict = {
        "initial_capital": 10000.0,
        "fee_rate": 0.001,
        "slippage_bps": 5.0,
        "symbol": "BTCUSDT",
        "timeframe_ms": 60000,
    }
    values.update(overrides)
    return BacktestConfig(**values)


def make_candle(close: float = 50000.0, timestamp: int = 1_700_000_000_000, **overrides) -> Candle:
    values = {
        "open": close,
        "high": close * 1.01,
        "low": close * 0.99,
        "close": close,
        "volume": 100.0,
        "timestamp": timestamp,
    }
    values.update(overrides)
    return Candle(**values)


class TestPortfolioSimulatorInitialization:
    """Test simulator construction."""

    def test_should_start_flat_with_initial_capital(self) -> None:
        """Test initial state."""
        simulator = PortfolioSimulator(make_config())

        state = simulator.get_state()
        assert state.balance == 10000.0
        assert state.position_size == 0
        assert state.position_symbol is None
        assert state.entry_price is None
        assert state.last_trade_index is None
        assert simulator.get_trades() == []

    def test_should_return_detached_state_snapshot(self) -> None:
        """Test that mutating a snapshot does not affect the simulator."""
        simulator = PortfolioSimulator(make_config())

        snapshot = simulator.get_state()
        snapshot.balance = 0.0

        assert simulator.get_state().balance == 10000.0


class TestPortfolioSimulatorValidateTrade:
    """Test pure eligibility checks."""

    def test_should_accept_valid_buy(self) -> None:
        """Test valid buy passes."""
        simulator = PortfolioSimulator(make_config())

        result = simulator.validate_trade("buy", 50000.0, "BTCUSDT")

        assert result.valid is True
        assert result.error is None

    def test_should_reject_buy_when_position_already_open(self) -> None:
        """Test buy while open is rejected."""
        simulator = PortfolioSimulator(make_config())
        simulator.buy(make_candle(), 1)

        result = simulator.validate_trade(ActionType.BUY, 50000.0, "BTCUSDT")

        assert result.valid is False
        assert "Position already open" in result.error

    def test_should_reject_buy_with_wrong_symbol(self) -> None:
        """Test symbol mismatch on buy."""
        simulator = PortfolioSimulator(make_config())

        result = simulator.validate_trade("buy", 50000.0, "ETHUSDT")

        assert result.valid is False
        assert "Symbol mismatch" in result.error

    def test_should_reject_buy_with_insufficient_balance(self) -> None:
        """Test tiny balance cannot afford the minimum order."""
        simulator = PortfolioSimulator(make_config(initial_capital=10.0))

        result = simulator.validate_trade("buy", 50000.0, "BTCUSDT")

        assert result.valid is False
        assert "Insufficient" in result.error

    def test_should_reject_sell_when_flat(self) -> None:
        """Test sell without position."""
        simulator = PortfolioSimulator(make_config())

        result = simulator.validate_trade("sell", 50000.0, "BTCUSDT")

        assert result.valid is False
        assert "No position to sell" in result.error

    def test_should_reject_sell_with_wrong_symbol(self) -> None:
        """Test symbol mismatch on sell."""
        simulator = PortfolioSimulator(make_config())
        simulator.buy(make_candle(), 1)

        result = simulator.validate_trade("sell", 50000.0, "ETHUSDT")

        assert result.valid is False
        assert result.error == "Symbol mismatch"

    def test_should_reject_buy_with_zero_or_non_finite_price(self) -> None:
        """Test a zero, negative or NaN price is rejected instead of raising."""
        simulator = PortfolioSimulator(make_config())

        results = [
            simulator.validate_trade("buy", price, "BTCUSDT")
            for price in (0.0, -1.0, float("nan"), float("inf"))
        ]

        assert all(result.valid is False for result in results)
        assert all(result.error == "Invalid price" for result in results)

    def test_should_reject_sell_with_zero_price(self) -> None:
        """Test sell validation rejects a zero price."""
        simulator = PortfolioSimulator(make_config())
        simulator.buy(make_candle(), 1)

        result = simulator.validate_trade("sell", 0.0, "BTCUSDT")

        assert result.valid is False
        assert result.error == "Invalid price"

    def test_should_reject_unknown_action(self) -> None:
        """Test an unknown action is a rejection, not an exception."""
        simulator = PortfolioSimulator(make_config())

        result = simulator.validate_trade("hold", 50000.0, "BTCUSDT")

        assert result.valid is False
        assert result.error == "Unknown action: hold"

    def test_should_not_change_state_when_validating(self) -> None:
        """Test validation is side-effect free."""
        simulator = PortfolioSimulator(make_config())

        simulator.validate_trade("buy", 50000.0, "BTCUSDT")

        assert simulator.get_state().is_flat
        assert simulator.get_trades() == []


class TestPortfolioSimulatorBuy:
    """Test buy execution."""

    def test_should_open_position_with_slippage_and_fee(self) -> None:
        """Test buy fill math."""
        # Arrange
        simulator = PortfolioSimulator(make_config())
        candle = make_candle(close=50000.0)

        # Act
        result = simulator.buy(candle, 3)

        # Assert - 10% of balance, fill 5 bps above close, 0.1% fee on notional
        assert result.success is True
        state = simulator.get_state()
        assert state.entry_price == pytest.approx(50025.0)
        assert state.position_size == pytest.approx(1000.0 / 50025.0)
        assert state.position_symbol == "BTCUSDT"
        assert state.balance == pytest.approx(10000.0 - 1000.0 - 1.0)
        assert state.last_trade_index == 3

        trades = simulator.get_trades()
        assert len(trades) == 1
        assert trades[0].action == ActionType.BUY
        assert trades[0].price == pytest.approx(50025.0)
        assert trades[0].fee == pytest.approx(1.0)
        assert trades[0].pnl is None
        assert trades[0].timestamp == candle.timestamp

    def test_should_fail_with_insufficient_balance_and_stay_flat(self) -> None:
        """Test that 10 USDT cannot open a BTC position at 50000."""
        simulator = PortfolioSimulator(make_config(initial_capital=10.0))

        result = simulator.buy(make_candle(close=50000.0), 1)

        assert result.success is False
        assert "Insufficient balance" in result.error
        state = simulator.get_state()
        assert state.is_flat
        assert state.balance == 10.0
        assert simulator.get_trades() == []

    def test_should_fail_when_fee_exceeds_remaining_balance(self) -> None:
        """Test rejection when notional fits but notional plus fee does not."""
        # Minimum order of 0.001 BTC costs 50 plus a 0.05 fee
        simulator = PortfolioSimulator(make_config(initial_capital=50.02))

        result = simulator.buy(make_candle(close=50000.0), 1)

        assert result.success is False
        assert result.error == "Insufficient balance after fees"
        assert simulator.get_state().is_flat

    def test_should_reject_zero_close_and_stay_flat(self) -> None:
        """Test a buy on a zero close fails without touching state."""
        simulator = PortfolioSimulator(make_config())

        result = simulator.buy(make_candle(close=0.0), 1)

        assert result.success is False
        assert result.error == "Invalid price"
        assert simulator.get_state().is_flat
        assert simulator.get_state().balance == 10000.0
        assert simulator.get_trades() == []

    def test_should_reject_second_buy(self) -> None:
        """Test buy is illegal while open."""
        simulator = PortfolioSimulator(make_config())
        simulator.buy(make_candle(), 1)
        balance_after_first = simulator.get_state().balance

        result = simulator.buy(make_candle(), 2)

        assert result.success is False
        assert simulator.get_state().balance == balance_after_first
        assert len(simulator.get_trades()) == 1

    def test_should_reject_candle_from_another_symbol(self) -> None:
        """Test symbol context on the candle is checked."""
        simulator = PortfolioSimulator(make_config())

        result = simulator.buy(make_candle(symbol="ETHUSDT"), 1)

        assert result.success is False
        assert "Symbol mismatch" in result.error


class TestPortfolioSimulatorSell:
    """Test sell execution."""

    def test_should_close_position_and_record_pnl(self) -> None:
        """Test sell fill math and pnl."""
        # Arrange
        simulator = PortfolioSimulator(make_config())
        simulator.buy(make_candle(close=50000.0), 1)
        size = simulator.get_state().position_size
        balance_before = simulator.get_state().balance

        # Act
        result = simulator.sell(make_candle(close=55000.0, timestamp=1_700_000_060_000), 2)

        # Assert
        assert result.success is True
        execution_price = 55000.0 * (1 - 5 / 10000)
        proceeds = size * execution_price * (1 - 0.001)
        expected_pnl = proceeds - size * 50025.0

        state = simulator.get_state()
        assert state.is_flat
        assert state.position_symbol is None
        assert state.entry_price is None
        assert state.last_trade_index == 2
        assert state.balance == pytest.approx(balance_before + proceeds)

        sell_trade = simulator.get_trades()[-1]
        assert sell_trade.action == ActionType.SELL
        assert sell_trade.price == pytest.approx(execution_price)
        assert sell_trade.size == pytest.approx(size)
        assert sell_trade.pnl == pytest.approx(expected_pnl)
        assert sell_trade.pnl > 0

    def test_should_lose_fees_and_slippage_on_flat_round_trip(self) -> None:
        """Test round trip at the same close loses money."""
        simulator = PortfolioSimulator(make_config())
        simulator.buy(make_candle(close=50000.0), 1)

        simulator.sell(make_candle(close=50000.0), 2)

        assert simulator.get_trades()[-1].pnl < 0
        assert simulator.get_state().balance < 10000.0

    def test_should_reject_zero_close_and_keep_position_open(self) -> None:
        """Test a sell on a zero close fails and leaves balance and ledger untouched."""
        # Arrange
        simulator = PortfolioSimulator(make_config())
        simulator.buy(make_candle(close=50000.0), 1)
        before = simulator.get_state()

        # Act
        result = simulator.sell(make_candle(close=0.0, timestamp=1_700_000_060_000), 2)

        # Assert
        assert result.success is False
        assert result.error == "Invalid price"
        after = simulator.get_state()
        assert after.balance == before.balance
        assert after.position_size == before.position_size
        assert after.entry_price == before.entry_price
        assert [trade.action for trade in simulator.get_trades()] == [ActionType.BUY]

    def test_should_reject_sell_when_flat(self) -> None:
        """Test sell is illegal while flat."""
        simulator = PortfolioSimulator(make_config())

        result = simulator.sell(make_candle(), 1)

        assert result.success is False
        assert result.error == "No position to sell"
        assert simulator.get_state().balance == 10000.0


class TestPortfolioSimulatorEquityAndInvariants:
    """Test equity and state invariants."""

    def test_should_mark_open_position_to_market(self) -> None:
        """Test equity includes unrealized position value without fees."""
        simulator = PortfolioSimulator(make_config())
        simulator.buy(make_candle(close=50000.0), 1)
        state = simulator.get_state()

        equity = simulator.get_equity(60000.0)

        assert equity == pytest.approx(state.balance + state.position_size * 60000.0)

    def test_should_equal_balance_when_flat(self) -> None:
        """Test equity of a flat portfolio."""
        simulator = PortfolioSimulator(make_config())

        assert simulator.get_equity(12345.0) == 10000.0

    def test_should_hold_invariants_across_operation_sequences(self) -> None:
        """Test open/flat invariant and non-negative balance after mixed calls."""
        simulator = PortfolioSimulator(make_config())
        prices = [50000.0, 51000.0, 49000.0, 48000.0, 52000.0, 53000.0, 47000.0]
        operations = ["buy", "buy", "sell", "sell", "buy", "sell", "buy"]

        for index, (price, operation) in enumerate(zip(prices, operations, strict=True)):
            candle = make_candle(close=price, timestamp=1_700_000_000_000 + index * 60000)
            getattr(simulator, operation)(candle, index)

            state = simulator.get_state()
            assert state.is_consistent()
            assert state.balance >= 0

        assert [trade.action for trade in simulator.get_trades()] == [
            ActionType.BUY,
            ActionType.SELL,
            ActionType.BUY,
            ActionType.SELL,
            ActionType.BUY,
        ]
