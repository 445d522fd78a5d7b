"""
Trade side and action enumerations.

This module defines the allowed trade sides, ledger actions and the
actions a trade monitor can request.
"""

from enum import StrEnum


class TradeSide(StrEnum):
    """
    Direction of a live trade.

    BUY profits when price rises, SELL profits when price falls.
    """

    BUY = "BUY"
    SELL = "SELL"

    @property
    def is_long(self) -> bool:
        """Check if side profits from rising prices."""
        return self == self.BUY

    @property
    def is_short(self) -> bool:
        """Check if side profits from falling prices."""
        return self == self.SELL

    def opposite(self) -> "TradeSide":
        """Get the opposite side."""
        return self.SELL if self.is_long else self.BUY  # type: ignore[return-value]

    @classmethod
    def from_string(cls, value: str) -> "TradeSide":
        """
        Convert string to TradeSide, with case-insensitive matching.

        Args:
            value: String representation of side ("buy", "LONG", ...)

        Returns:
            Corresponding TradeSide

        Raises:
            ValueError: If side is not recognised
        """
        value_upper = value.upper()
        if value_upper in ["BUY", "LONG"]:
            return cls.BUY
        elif value_upper in ["SELL", "SHORT"]:
            return cls.SELL
        raise ValueError(f"Unsupported trade side: {value}. Supported sides: BUY, SELL")


class ActionType(StrEnum):
    """
    Executed ledger actions.

    A buy opens the simulated position, a sell closes it.
    """

    BUY = "buy"
    SELL = "sell"

    @property
    def is_opening(self) -> bool:
        """Check if action opens a position."""
        return self == self.BUY

    @property
    def is_closing(self) -> bool:
        """Check if action closes a position."""
        return self == self.SELL


class TradeActionType(StrEnum):
    """Actions a trade monitor may ask its caller to carry out."""

    PARTIAL_EXIT = "partial_exit"
    UPDATE_TRAILING_STOP = "update_trailing_stop"
    TRIGGER_TRAILING_STOP = "trigger_trailing_stop"
    NO_ACTION = "no_action"

    @property
    def reduces_position(self) -> bool:
        """Check if action closes some or all of the open quantity."""
        return self in [self.PARTIAL_EXIT, self.TRIGGER_TRAILING_STOP]
