"""
Unit tests for risk-based position sizing.
Testing hard caps, risk scaling, order size clamping and leverage checks.
"""

import pytest

from src.core.exceptions.backtest import InvalidLeverageError, ValidationError
from src.core.models.risk import RiskConfig
from src.core.risk.position_sizing import (
    calculate_futures_position_size,
    calculate_max_position_size,
    calculate_spot_position_size,
    get_default_risk_config,
    validate_leverage,
)


def make_risk_config(**overrides: float) -> RiskConfig:
    values = {
        "max_leverage": 10.0,
        "max_risk_per_trade": 0.02,
        "max_position_size": 0.1,
        "min_order_size": 0.001,
        "max_order_size": 1000.0,
    }
    values.update(overrides)
    return RiskConfig(**values)


class TestDefaultRiskConfig:
    """Test suite for the baseline risk policy."""

    def test_should_return_documented_baseline(self) -> None:
        """Test default policy values."""
        config = get_default_risk_config()

        assert config.max_leverage == 10
        assert config.max_risk_per_trade == 0.02
        assert config.max_position_size == 0.1
        assert config.min_order_size == 0.001
        assert config.max_order_size == 1000

    def test_should_be_immutable(self) -> None:
        """Test that the policy cannot be mutated."""
        config = get_default_risk_config()

        with pytest.raises(AttributeError):
            config.max_leverage = 50.0  # type: ignore[misc]

    def test_should_reject_invalid_policy_values(self) -> None:
        """Test construction-time validation of policy bounds."""
        with pytest.raises(ValidationError, match="max_leverage must be positive"):
            make_risk_config(max_leverage=0.0)
        with pytest.raises(ValidationError, match="max_position_size must be between 0 and 1"):
            make_risk_config(max_position_size=1.5)
        with pytest.raises(ValidationError, match="cannot exceed"):
            make_risk_config(min_order_size=10.0, max_order_size=1.0)


class TestCalculateMaxPositionSize:
    """Test suite for calculate_max_position_size."""

    def test_should_cap_notional_by_position_size_fraction(self) -> None:
        """Test sizing with the default policy on a 10k balance."""
        # Act
        result = calculate_max_position_size(
            balance=10000.0, price=50000.0, risk_config=get_default_risk_config()
        )

        # Assert - 10% of balance, risk budget not binding
        assert result.max_notional == pytest.approx(1000.0)
        assert result.max_quantity == pytest.approx(0.02)
        assert result.recommended_quantity == pytest.approx(0.02)
        assert result.recommended_notional == pytest.approx(1000.0)
        assert result.leverage_used == 1.0
        assert result.risk_amount == pytest.approx(20.0)

    def test_should_scale_down_to_risk_budget(self) -> None:
        """Test that the stop-out loss is kept inside max_risk_per_trade."""
        config = make_risk_config(max_risk_per_trade=0.01, max_position_size=1.0)

        # Act - 5% stop on a 10k position risks 500, budget is 100
        result = calculate_max_position_size(
            balance=10000.0, price=100.0, risk_config=config, stop_loss_percent=0.05
        )

        # Assert
        assert result.max_notional == pytest.approx(10000.0)
        assert result.recommended_notional == pytest.approx(2000.0)
        assert result.recommended_quantity == pytest.approx(20.0)
        assert result.risk_amount == pytest.approx(100.0)

    def test_should_cap_notional_by_leverage(self) -> None:
        """Test that leverage below 1 limits notional below balance."""
        config = make_risk_config(max_position_size=1.0, max_risk_per_trade=1.0)

        result = calculate_max_position_size(
            balance=10000.0, price=100.0, risk_config=config, leverage=0.5
        )

        assert result.max_notional == pytest.approx(5000.0)
        assert result.leverage_used == 0.5

    def test_should_clamp_to_min_order_size(self) -> None:
        """Test that tiny balances are lifted to the minimum order size."""
        result = calculate_max_position_size(
            balance=10.0, price=50000.0, risk_config=get_default_risk_config()
        )

        assert result.max_quantity == pytest.approx(0.00002)
        assert result.recommended_quantity == 0.001
        assert result.recommended_notional == pytest.approx(50.0)

    def test_should_clamp_to_max_order_size(self) -> None:
        """Test that large sizes are cut to the maximum order size."""
        config = make_risk_config(max_order_size=0.01)

        result = calculate_max_position_size(balance=100000.0, price=100.0, risk_config=config)

        assert result.recommended_quantity == 0.01
        assert result.recommended_notional == pytest.approx(1.0)

    def test_should_not_divide_by_zero_without_stop_distance(self) -> None:
        """Test zero stop loss distance keeps the hard cap."""
        result = calculate_max_position_size(
            balance=10000.0,
            price=100.0,
            risk_config=get_default_risk_config(),
            stop_loss_percent=0.0,
        )

        assert result.recommended_notional == pytest.approx(1000.0)
        assert result.risk_amount == 0.0

    @pytest.mark.parametrize(
        ("balance", "price"),
        [(10000.0, 50000.0), (2500.0, 3000.0), (100000.0, 1.5), (50000.0, 0.25)],
    )
    def test_should_keep_recommendation_within_bounds(self, balance: float, price: float) -> None:
        """Test sizing bounds across balances and prices."""
        config = get_default_risk_config()

        result = calculate_max_position_size(balance=balance, price=price, risk_config=config)

        assert result.recommended_notional <= result.max_notional + 1e-9
        assert config.min_order_size <= result.recommended_quantity <= config.max_order_size


class TestSpotAndFuturesSizing:
    """Test suite for spot and futures wrappers."""

    def test_spot_sizing_should_use_unit_leverage(self) -> None:
        """Test that spot sizing fixes leverage to 1."""
        result = calculate_spot_position_size(10000.0, 50000.0, get_default_risk_config())

        assert result.leverage_used == 1.0

    def test_futures_sizing_should_use_requested_leverage(self) -> None:
        """Test leveraged sizing within policy."""
        config = make_risk_config(max_position_size=1.0, max_risk_per_trade=1.0)

        result = calculate_futures_position_size(10000.0, 100.0, config, leverage=5.0)

        assert result.leverage_used == 5.0
        assert result.max_notional == pytest.approx(10000.0)

    @pytest.mark.parametrize("leverage", [0.0, -1.0, 10.5, 125.0])
    def test_futures_sizing_should_reject_invalid_leverage(self, leverage: float) -> None:
        """Test leverage outside (0, max_leverage] raises."""
        with pytest.raises(InvalidLeverageError) as exc_info:
            calculate_futures_position_size(10000.0, 100.0, get_default_risk_config(), leverage)

        assert exc_info.value.leverage == leverage
        assert exc_info.value.max_leverage == 10.0
        assert isinstance(exc_info.value, ValidationError)

    @pytest.mark.parametrize("leverage", [0.5, 1.0, 10.0])
    def test_futures_sizing_should_accept_valid_leverage(self, leverage: float) -> None:
        """Test boundary leverage values are accepted."""
        result = calculate_futures_position_size(
            10000.0, 100.0, get_default_risk_config(), leverage
        )

        assert result.leverage_used == leverage


class TestValidateLeverage:
    """Test suite for validate_leverage."""

    def test_should_validate_leverage_range(self) -> None:
        """Test leverage range check."""
        config = get_default_risk_config()

        assert validate_leverage(1.0, config)
        assert validate_leverage(10.0, config)
        assert not validate_leverage(10.01, config)
        assert not validate_leverage(0.0, config)
        assert not validate_leverage(-2.0, config)
