"""
Live trade monitoring models.

A ``TradeState`` is a read-only snapshot built by the caller from its price
feed and persisted exit/trailing state. The monitor turns it into a list of
``TradeAction`` values for an order-execution layer to carry out.
"""

from dataclasses import dataclass, field, replace
from typing import ClassVar

from src.core.enums import TradeActionType, TradeSide
from src.core.exceptions.backtest import ValidationError
from src.core.utils.validation import validate_non_negative, validate_positive


@dataclass(frozen=True)
class ExitLevel:
    """One step of a partial-exit plan.

    Attributes:
        profit_pct: Profit fraction of entry price that triggers the exit
        quantity_pct: Fraction of the open quantity to close at this level
    """

    profit_pct: float
    quantity_pct: float

    def to_dict(self) -> dict:
        """Convert level to dictionary."""
        return {"profit_pct": self.profit_pct, "quantity_pct": self.quantity_pct}


@dataclass(frozen=True)
class ExitStrategy:
    """Ordered partial-exit levels."""

    levels: tuple[ExitLevel, ...]
    auto_calculated: bool = False

    def __post_init__(self) -> None:
        # Accept any sequence of levels, store as tuple
        object.__setattr__(self, "levels", tuple(self.levels))

    @property
    def total_quantity_pct(self) -> float:
        """Sum of quantity fractions across all levels."""
        return sum((level.quantity_pct for level in self.levels), 0.0)

    @property
    def final_profit_pct(self) -> float | None:
        """Profit target of the last level, None for an empty plan."""
        return self.levels[-1].profit_pct if self.levels else None

    def to_dict(self) -> dict:
        """Convert strategy to dictionary."""
        return {
            "levels": [level.to_dict() for level in self.levels],
            "auto_calculated": self.auto_calculated,
        }


@dataclass(frozen=True)
class TrailingStopConfig:
    """Trailing stop settings.

    Attributes:
        enabled: Whether trailing is active for the trade
        activation_profit_pct: Profit fraction at which trailing starts
        trail_distance_pct: Distance of the stop behind price, as a fraction
        min_trail_distance_pct: Tightest distance the stop may trail at
    """

    enabled: bool
    activation_profit_pct: float
    trail_distance_pct: float
    min_trail_distance_pct: float

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "enabled": self.enabled,
            "activation_profit_pct": self.activation_profit_pct,
            "trail_distance_pct": self.trail_distance_pct,
            "min_trail_distance_pct": self.min_trail_distance_pct,
        }


@dataclass(frozen=True)
class TradeState:
    """Snapshot of a live trade consumed by the trade monitor."""

    id: int | str
    side: TradeSide
    entry_price: float
    quantity: float
    exited_quantity: float
    tp_pct: float
    sl_pct: float
    current_price: float
    exit_strategy: ExitStrategy | None = None
    trailing_stop_config: TrailingStopConfig | None = None
    current_trailing_stop_price: float | None = None

    def __post_init__(self) -> None:
        """Validate snapshot data after initialization."""
        if not isinstance(self.side, TradeSide):
            try:
                side = TradeSide.from_string(str(self.side))
            except ValueError as e:
                raise ValidationError(str(e)) from e
            object.__setattr__(self, "side", side)
        validate_positive(self.entry_price, "entry_price")
        validate_positive(self.quantity, "quantity")
        validate_non_negative(self.exited_quantity, "exited_quantity")
        if self.exited_quantity > self.quantity:
            raise ValidationError(
                f"exited_quantity ({self.exited_quantity}) cannot exceed "
                f"quantity ({self.quantity})"
            )

    @property
    def remaining_quantity(self) -> float:
        """Quantity still open."""
        return self.quantity - self.exited_quantity

    @property
    def remaining_quantity_pct(self) -> float:
        """Fraction of the original quantity still open."""
        return 1.0 - (self.exited_quantity / self.quantity)

    def with_price(self, current_price: float) -> "TradeState":
        """Return the same trade refreshed with a new market price."""
        return replace(self, current_price=current_price)


@dataclass(frozen=True)
class PartialExitAction:
    """Close ``quantity`` of the trade at a planned exit level."""

    level: ExitLevel
    quantity: float
    type: ClassVar[TradeActionType] = TradeActionType.PARTIAL_EXIT

    def to_dict(self) -> dict:
        return {"type": self.type.value, "level": self.level.to_dict(), "quantity": self.quantity}


@dataclass(frozen=True)
class UpdateTrailingStopAction:
    """Move the trailing stop to ``new_trailing_stop_price``."""

    new_trailing_stop_price: float
    type: ClassVar[TradeActionType] = TradeActionType.UPDATE_TRAILING_STOP

    def to_dict(self) -> dict:
        return {"type": self.type.value, "new_trailing_stop_price": self.new_trailing_stop_price}


@dataclass(frozen=True)
class TriggerTrailingStopAction:
    """Close the remaining ``quantity`` because the trailing stop was hit."""

    quantity: float
    type: ClassVar[TradeActionType] = TradeActionType.TRIGGER_TRAILING_STOP

    def to_dict(self) -> dict:
        return {"type": self.type.value, "quantity": self.quantity}


@dataclass(frozen=True)
class NoAction:
    """Nothing to do for this evaluation."""

    type: ClassVar[TradeActionType] = TradeActionType.NO_ACTION

    def to_dict(self) -> dict:
        return {"type": self.type.value}


TradeAction = PartialExitAction | UpdateTrailingStopAction | TriggerTrailingStopAction | NoAction


@dataclass(frozen=True)
class TradeEvaluation:
    """Outcome of evaluating a trade snapshot."""

    actions: list[TradeAction] = field(default_factory=list)
    current_profit_pct: float = 0.0
    remaining_quantity: float = 0.0

    @property
    def action_types(self) -> list[TradeActionType]:
        """Types of the requested actions, in priority order."""
        return [action.type for action in self.actions]

    def requires_action(self) -> bool:
        """Check if the caller has anything to execute."""
        return any(action.type != TradeActionType.NO_ACTION for action in self.actions)

    def to_dict(self) -> dict:
        """Convert evaluation to dictionary."""
        return {
            "actions": [action.to_dict() for action in self.actions],
            "current_profit_pct": self.current_profit_pct,
            "remaining_quantity": self.remaining_quantity,
        }
