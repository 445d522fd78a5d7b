"""
Simulated portfolio state.
"""

from dataclasses import dataclass, replace


@dataclass
class PortfolioState:
    """Cash and single-position state of a portfolio simulation.

    ``balance`` is in quote currency, ``position_size`` in base units.
    A flat portfolio has ``position_size == 0`` and no symbol or entry price.
    """

    balance: float
    position_size: float = 0.0
    position_symbol: str | None = None
    entry_price: float | None = None
    last_trade_index: int | None = None

    @property
    def is_flat(self) -> bool:
        """Check if no position is open."""
        return self.position_size == 0

    @property
    def is_open(self) -> bool:
        """Check if a position is open."""
        return self.position_size > 0

    def is_consistent(self) -> bool:
        """Check the open/flat invariant across size, symbol and entry price."""
        has_size = self.position_size > 0
        return has_size == (self.position_symbol is not None) == (self.entry_price is not None)

    def copy(self) -> "PortfolioState":
        """Return a detached snapshot of this state."""
        return replace(self)

    def to_dict(self) -> dict:
        """Convert state to dictionary."""
        return {
            "balance": self.balance,
            "position_size": self.position_size,
            "position_symbol": self.position_symbol,
            "entry_price": self.entry_price,
            "last_trade_index": self.last_trade_index,
        }
