"""Moving-average helpers over candle history."""

from collections.abc import Sequence

import pandas as pd

from src.core.models.candle import Candle


def closes_until(candles: Sequence[Candle], index: int) -> pd.Series:
    """Close prices from the start of the series up to and including ``index``."""
    return pd.Series([candle.close for candle in candles[: index + 1]], dtype=float)


def simple_moving_average(closes: pd.Series, period: int) -> pd.Series:
    """Rolling mean with a full window; leading values are NaN."""
    return closes.rolling(window=period, min_periods=period).mean()
