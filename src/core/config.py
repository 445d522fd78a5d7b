"""
Environment-driven configuration.

Risk policy overrides are read from environment variables and validated
with pydantic before being turned into domain objects.
"""

import os
from collections.abc import Mapping

from pydantic import BaseModel, Field, ValidationError, model_validator

from src.core.constants import (
    DEFAULT_FEE_RATE,
    DEFAULT_INITIAL_CAPITAL,
    DEFAULT_MAX_LEVERAGE,
    DEFAULT_MAX_ORDER_SIZE,
    DEFAULT_MAX_POSITION_SIZE,
    DEFAULT_MAX_RISK_PER_TRADE,
    DEFAULT_MIN_ORDER_SIZE,
    DEFAULT_SLIPPAGE_BPS,
    DEFAULT_SYMBOL,
    DEFAULT_TIMEFRAME_MS,
)
from src.core.exceptions.backtest import ConfigurationError
from src.core.models.backtest import BacktestConfig
from src.core.models.risk import RiskConfig

RISK_ENV_VARS = {
    "max_leverage": "MAX_LEVERAGE",
    "max_risk_per_trade": "MAX_RISK_PER_TRADE",
    "max_position_size": "MAX_POSITION_SIZE",
    "min_order_size": "MIN_ORDER_SIZE",
    "max_order_size": "MAX_ORDER_SIZE",
}

BACKTEST_ENV_VARS = {
    "initial_capital": "BACKTEST_INITIAL_CAPITAL",
    "fee_rate": "BACKTEST_FEE_RATE",
    "slippage_bps": "BACKTEST_SLIPPAGE_BPS",
    "symbol": "BACKTEST_SYMBOL",
    "timeframe_ms": "BACKTEST_TIMEFRAME_MS",
}


class RiskSettings(BaseModel):
    """Validated risk policy settings."""

    max_leverage: float = Field(default=DEFAULT_MAX_LEVERAGE, gt=0, description="Maximum leverage")
    max_risk_per_trade: float = Field(
        default=DEFAULT_MAX_RISK_PER_TRADE, ge=0, le=1, description="Balance fraction at risk"
    )
    max_position_size: float = Field(
        default=DEFAULT_MAX_POSITION_SIZE, ge=0, le=1, description="Balance fraction per position"
    )
    min_order_size: float = Field(default=DEFAULT_MIN_ORDER_SIZE, ge=0)
    max_order_size: float = Field(default=DEFAULT_MAX_ORDER_SIZE, ge=0)

    @model_validator(mode="after")
    def validate_order_bounds(self) -> "RiskSettings":
        """Validate that the order size bounds are ordered."""
        if self.min_order_size > self.max_order_size:
            raise ValueError("min_order_size cannot exceed max_order_size")
        return self

    def to_risk_config(self) -> RiskConfig:
        """Build the immutable domain policy."""
        return RiskConfig(**self.model_dump())


class BacktestSettings(BaseModel):
    """Validated backtest settings."""

    initial_capital: float = Field(default=DEFAULT_INITIAL_CAPITAL, gt=0)
    fee_rate: float = Field(default=DEFAULT_FEE_RATE, ge=0, lt=1)
    slippage_bps: float = Field(default=DEFAULT_SLIPPAGE_BPS, ge=0, lt=10000)
    symbol: str = Field(default=DEFAULT_SYMBOL, min_length=1)
    timeframe_ms: int = Field(default=DEFAULT_TIMEFRAME_MS, gt=0)

    def to_backtest_config(self) -> BacktestConfig:
        """Build the backtest configuration."""
        return BacktestConfig(**self.model_dump())


def _collect(env: Mapping[str, str], names: Mapping[str, str]) -> dict[str, str]:
    """Pick the set environment variables for the given field names."""
    return {field: env[var] for field, var in names.items() if env.get(var, "") != ""}


def risk_config_from_env(env: Mapping[str, str] | None = None) -> RiskConfig:
    """
    Parse a risk policy from environment variables.

    Unset variables fall back to the default baseline.

    Args:
        env: Mapping to read from (default ``os.environ``)

    Returns:
        RiskConfig

    Raises:
        ConfigurationError: If a variable is not a number or is out of range
    """
    source = os.environ if env is None else env
    try:
        settings = RiskSettings(**_collect(source, RISK_ENV_VARS))
    except ValidationError as e:
        raise ConfigurationError(f"Invalid risk configuration: {e}") from e
    return settings.to_risk_config()


def backtest_config_from_env(env: Mapping[str, str] | None = None) -> BacktestConfig:
    """
    Parse backtest settings from environment variables.

    Raises:
        ConfigurationError: If a variable is invalid
    """
    source = os.environ if env is None else env
    try:
        settings = BacktestSettings(**_collect(source, BACKTEST_ENV_VARS))
    except ValidationError as e:
        raise ConfigurationError(f"Invalid backtest configuration: {e}") from e
    return settings.to_backtest_config()
