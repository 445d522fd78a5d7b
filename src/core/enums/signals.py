"""
Strategy signal enumeration.
"""

from enum import StrEnum


class Signal(StrEnum):
    """
    Signals a strategy can emit for a candle.

    Signal values compare equal to plain strings, so strategies may
    return either the enum member or "buy"/"sell"/"hold".
    """

    BUY = "buy"
    SELL = "sell"
    HOLD = "hold"

    @classmethod
    def parse(cls, value: "Signal | str | None") -> "Signal | None":
        """
        Convert a raw strategy output to a Signal.

        Args:
            value: Signal, string or None

        Returns:
            Matching Signal, HOLD for None, or None if the value is unknown
        """
        if value is None:
            return cls.HOLD
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return None
