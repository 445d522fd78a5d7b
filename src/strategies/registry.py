"""
Strategy registry for creating strategies by name.
"""

from collections.abc import Callable

from loguru import logger

from src.core.exceptions.backtest import StrategyError
from src.core.interfaces.strategy import IStrategy

from .sma_crossover import SmaCrossoverStrategy

StrategyFactory = Callable[[], IStrategy]


class StrategyRegistry:
    """Maps strategy names to factories; ``sma-crossover`` is built in."""

    _strategies: dict[str, StrategyFactory] = {
        "sma-crossover": SmaCrossoverStrategy,
    }

    @classmethod
    def register(cls, name: str, factory: StrategyFactory) -> None:
        """Register a strategy factory, replacing any existing one with that name."""
        if name in cls._strategies:
            logger.warning(f"Overriding registered strategy: {name}")
        cls._strategies[name] = factory

    @classmethod
    def unregister(cls, name: str) -> None:
        """Remove a registered strategy if present."""
        cls._strategies.pop(name, None)

    @classmethod
    def create(cls, name: str) -> IStrategy:
        """
        Create a strategy instance by name.

        Raises:
            StrategyError: If no strategy is registered under ``name``
        """
        factory = cls._strategies.get(name)
        if factory is None:
            raise StrategyError(
                f"Strategy not found: {name}. Available strategies: {', '.join(cls.names())}"
            )
        return factory()

    @classmethod
    def names(cls) -> list[str]:
        """Names of registered strategies, sorted."""
        return sorted(cls._strategies)
