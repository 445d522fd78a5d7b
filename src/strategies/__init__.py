"""
Bundled example strategies and strategy composition.
"""

from .filtered import FilteredStrategy, TrendFilter
from .registry import StrategyRegistry
from .sma_crossover import SmaCrossoverStrategy

__all__ = ["FilteredStrategy", "SmaCrossoverStrategy", "StrategyRegistry", "TrendFilter"]
