"""
Custom exception hierarchy for the trading engine.

Configuration and programming errors are raised; rejected trades are
returned as result values and never raised.
"""


class BacktestException(Exception):
    """Base exception for all engine errors."""

    pass


class ValidationError(BacktestException):
    """Raised when input validation fails."""

    pass


class StrategyError(BacktestException):
    """Raised when a strategy cannot be resolved or produces an invalid result."""

    pass


class ConfigurationError(BacktestException):
    """Raised when configuration is invalid."""

    pass


class InvalidLeverageError(ValidationError):
    """Raised when leverage is outside the allowed range of a risk policy."""

    def __init__(self, leverage: float, max_leverage: float):
        self.leverage = leverage
        self.max_leverage = max_leverage
        super().__init__(f"Leverage {leverage} exceeds maximum {max_leverage}")
