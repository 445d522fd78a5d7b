"""
Position sizing under a risk policy.

Sizing starts from a hard cap (a fraction of balance, further limited by
leverage), scales it down so that a stop-out loses no more than the
policy's per-trade risk budget, then clamps the quantity to the policy's
order size bounds.
"""

from loguru import logger

from src.core.constants import (
    DEFAULT_MAX_LEVERAGE,
    DEFAULT_MAX_ORDER_SIZE,
    DEFAULT_MAX_POSITION_SIZE,
    DEFAULT_MAX_RISK_PER_TRADE,
    DEFAULT_MIN_ORDER_SIZE,
    DEFAULT_STOP_LOSS_PERCENT,
)
from src.core.exceptions.backtest import InvalidLeverageError
from src.core.models.risk import PositionSizingResult, RiskConfig
from src.core.types.financial import ONE, ZERO, clamp


def get_default_risk_config() -> RiskConfig:
    """Baseline policy used whenever the caller supplies none."""
    return RiskConfig(
        max_leverage=DEFAULT_MAX_LEVERAGE,
        max_risk_per_trade=DEFAULT_MAX_RISK_PER_TRADE,
        max_position_size=DEFAULT_MAX_POSITION_SIZE,
        min_order_size=DEFAULT_MIN_ORDER_SIZE,
        max_order_size=DEFAULT_MAX_ORDER_SIZE,
    )


def validate_leverage(leverage: float, risk_config: RiskConfig) -> bool:
    """Check that ``0 < leverage <= risk_config.max_leverage``."""
    return ZERO < leverage <= risk_config.max_leverage


def _risk_ratio(balance: float, risk_amount: float, max_risk_per_trade: float) -> float:
    """Scale factor that keeps the stop-out loss inside the risk budget."""
    if risk_amount <= ZERO:
        return ONE
    return min(ONE, (balance * max_risk_per_trade) / risk_amount)


def calculate_max_position_size(
    balance: float,
    price: float,
    risk_config: RiskConfig,
    leverage: float = 1.0,
    stop_loss_percent: float = DEFAULT_STOP_LOSS_PERCENT,
) -> PositionSizingResult:
    """
    Calculate hard and risk-adjusted position sizes.

    Args:
        balance: Available balance in quote currency
        price: Asset price, must be positive
        risk_config: Risk policy to apply
        leverage: Leverage multiplier (default 1.0)
        stop_loss_percent: Stop distance as a fraction of entry (default 2%)

    Returns:
        PositionSizingResult. ``recommended_quantity`` always lies within
        ``[min_order_size, max_order_size]``, so it may exceed what the
        balance can pay for when the balance is tiny.
    """
    max_notional = min(balance * risk_config.max_position_size, balance * leverage)
    max_quantity = max_notional / price

    risk_amount = max_notional * stop_loss_percent
    risk_ratio = _risk_ratio(balance, risk_amount, risk_config.max_risk_per_trade)

    risk_adjusted_quantity = (max_notional * risk_ratio) / price
    final_quantity = clamp(
        risk_adjusted_quantity, risk_config.min_order_size, risk_config.max_order_size
    )
    final_notional = final_quantity * price

    logger.debug(
        f"Sized position: balance={balance:.2f} price={price} leverage={leverage} "
        f"max_notional={max_notional:.2f} risk_ratio={risk_ratio:.4f} quantity={final_quantity}"
    )

    return PositionSizingResult(
        max_quantity=max_quantity,
        max_notional=max_notional,
        recommended_quantity=final_quantity,
        recommended_notional=final_notional,
        leverage_used=leverage,
        risk_amount=final_notional * stop_loss_percent,
    )


def calculate_spot_position_size(
    balance: float,
    price: float,
    risk_config: RiskConfig,
    stop_loss_percent: float = DEFAULT_STOP_LOSS_PERCENT,
) -> PositionSizingResult:
    """Size a spot position (leverage fixed at 1)."""
    return calculate_max_position_size(
        balance=balance,
        price=price,
        risk_config=risk_config,
        leverage=1.0,
        stop_loss_percent=stop_loss_percent,
    )


def calculate_futures_position_size(
    balance: float,
    price: float,
    risk_config: RiskConfig,
    leverage: float,
    stop_loss_percent: float = DEFAULT_STOP_LOSS_PERCENT,
) -> PositionSizingResult:
    """
    Size a leveraged futures position.

    Raises:
        InvalidLeverageError: If leverage is not positive or exceeds the
            policy's maximum
    """
    if not validate_leverage(leverage, risk_config):
        raise InvalidLeverageError(leverage=leverage, max_leverage=risk_config.max_leverage)

    return calculate_max_position_size(
        balance=balance,
        price=price,
        risk_config=risk_config,
        leverage=leverage,
        stop_loss_percent=stop_loss_percent,
    )
