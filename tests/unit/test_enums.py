"""
Unit tests for enum types.
"""

import pytest

from src.core.enums import ActionType, Signal, TradeActionType, TradeSide


class TestTradeSideEnum:
    """Test suite for TradeSide enum."""

    def test_should_have_correct_values(self) -> None:
        """Test enum values."""
        assert TradeSide.BUY == "BUY"
        assert TradeSide.SELL == "SELL"

    def test_should_check_direction(self) -> None:
        """Test long/short helpers."""
        assert TradeSide.BUY.is_long and not TradeSide.BUY.is_short
        assert TradeSide.SELL.is_short and not TradeSide.SELL.is_long

    def test_should_get_opposite_side(self) -> None:
        """Test opposite."""
        assert TradeSide.BUY.opposite() == TradeSide.SELL
        assert TradeSide.SELL.opposite() == TradeSide.BUY

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("buy", TradeSide.BUY),
            ("LONG", TradeSide.BUY),
            ("Sell", TradeSide.SELL),
            ("short", TradeSide.SELL),
        ],
    )
    def test_should_convert_from_string_case_insensitive(
        self, value: str, expected: TradeSide
    ) -> None:
        """Test string conversion."""
        assert TradeSide.from_string(value) == expected

    def test_should_raise_error_for_invalid_side(self) -> None:
        """Test invalid side."""
        with pytest.raises(ValueError):
            TradeSide.from_string("sideways")


class TestActionTypeEnum:
    """Test suite for ledger action enum."""

    def test_should_have_correct_values(self) -> None:
        """Test enum values."""
        assert ActionType.BUY.value == "buy"
        assert ActionType.SELL.value == "sell"


class TestTradeActionTypeEnum:
    """Test suite for monitor action enum."""

    def test_should_have_correct_values(self) -> None:
        """Test wire values."""
        assert [t.value for t in TradeActionType] == [
            "partial_exit",
            "update_trailing_stop",
            "trigger_trailing_stop",
            "no_action",
        ]

    def test_should_check_if_action_reduces_position(self) -> None:
        """Test reducing actions."""
        assert TradeActionType.PARTIAL_EXIT.reduces_position
        assert TradeActionType.TRIGGER_TRAILING_STOP.reduces_position
        assert not TradeActionType.UPDATE_TRAILING_STOP.reduces_position
        assert not TradeActionType.NO_ACTION.reduces_position


class TestSignalEnum:
    """Test suite for strategy signals."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("buy", Signal.BUY),
            ("SELL", Signal.SELL),
            (Signal.HOLD, Signal.HOLD),
            (None, Signal.HOLD),
        ],
    )
    def test_should_parse_raw_signals(self, raw: str | None, expected: Signal) -> None:
        """Test parsing."""
        assert Signal.parse(raw) == expected

    def test_should_return_none_for_unknown_signal(self) -> None:
        """Test unknown value."""
        assert Signal.parse("moon") is None
