"""
Candle domain model and conversion from OHLCV frames.
"""

from dataclasses import dataclass

import pandas as pd

from src.core.exceptions.backtest import ValidationError

REQUIRED_COLUMNS = ["timestamp", "open", "high", "low", "close", "volume"]
EPOCH = pd.Timestamp("1970-01-01", tz="UTC")


@dataclass(frozen=True)
class Candle:
    """A single OHLCV bar.

    ``timestamp`` is the bar open time in epoch milliseconds. ``symbol`` is
    the market the bar belongs to; None means the feed carries no symbol
    context and the bar is assumed to belong to whatever is being simulated.
    """

    open: float
    high: float
    low: float
    close: float
    volume: float
    timestamp: int
    symbol: str | None = None

    def to_dict(self) -> dict:
        """Convert candle to dictionary."""
        return {
            "timestamp": self.timestamp,
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
            "volume": self.volume,
            "symbol": self.symbol,
        }


def _timestamps_to_ms(timestamps: pd.Series) -> pd.Series:
    """Normalize a timestamp column to integer epoch milliseconds."""
    if pd.api.types.is_datetime64_any_dtype(timestamps):
        utc_timestamps = pd.to_datetime(timestamps, utc=True)
        return (utc_timestamps - EPOCH) // pd.Timedelta(milliseconds=1)
    return timestamps.astype("int64")


def candles_from_dataframe(data: pd.DataFrame, symbol: str | None = None) -> list[Candle]:
    """
    Build candles from an OHLCV DataFrame.

    Args:
        data: DataFrame with timestamp, open, high, low, close, volume columns.
            Timestamps may be epoch milliseconds or datetimes.
        symbol: Optional symbol context attached to every candle

    Returns:
        Candles ordered by timestamp

    Raises:
        ValidationError: If required columns are missing or timestamps repeat
    """
    if data.empty:
        return []

    missing_columns = set(REQUIRED_COLUMNS) - set(data.columns)
    if missing_columns:
        raise ValidationError(f"Missing required columns: {missing_columns}")

    if data["timestamp"].duplicated().any():
        raise ValidationError("Duplicate timestamps found in data")

    frame = data[REQUIRED_COLUMNS].sort_values("timestamp").reset_index(drop=True)
    timestamps = _timestamps_to_ms(frame["timestamp"])

    return [
        Candle(
            open=float(row.open),
            high=float(row.high),
            low=float(row.low),
            close=float(row.close),
            volume=float(row.volume),
            timestamp=int(ts),
            symbol=symbol,
        )
        for row, ts in zip(frame.itertuples(index=False), timestamps, strict=True)
    ]
