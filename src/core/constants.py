"""
Core constants and limits.

Defines system-wide defaults for position sizing, execution costs and
exit planning.
"""

# Default Risk Policy
DEFAULT_MAX_LEVERAGE = 10.0
DEFAULT_MAX_RISK_PER_TRADE = 0.02  # 2% of balance at risk per trade
DEFAULT_MAX_POSITION_SIZE = 0.1  # 10% of balance per position
DEFAULT_MIN_ORDER_SIZE = 0.001
DEFAULT_MAX_ORDER_SIZE = 1000.0
DEFAULT_STOP_LOSS_PERCENT = 0.02

# Execution Costs
DEFAULT_FEE_RATE = 0.001  # 0.1% taker fee
DEFAULT_SLIPPAGE_BPS = 5.0  # 0.05%
BASIS_POINTS = 10000.0

# Backtest Defaults
DEFAULT_INITIAL_CAPITAL = 10000.0
DEFAULT_SYMBOL = "BTCUSDT"
DEFAULT_TIMEFRAME_MS = 60_000  # 1 minute
TRADING_DAYS_PER_YEAR = 252  # sharpe annualization

# Exit Planning
SMALL_TP_THRESHOLD = 0.02  # below: 2 levels
MEDIUM_TP_THRESHOLD = 0.05  # below: 3 levels, otherwise 4
FIRST_EXIT_FRACTION = 0.3  # first level sits at 30% of TP
MIN_EXIT_LEVELS = 2
MAX_EXIT_LEVELS = 5
HIGH_VOLATILITY_THRESHOLD = 0.05
LOW_VOLATILITY_THRESHOLD = 0.01

# Trailing Stop Reconfiguration
VOLATILITY_CHANGE_THRESHOLD = 0.5  # 50% change is significant
TRAIL_WIDEN_FACTOR = 1.5
TRAIL_TIGHTEN_FACTOR = 0.75

# Numeric Tolerance
FLOAT_TOLERANCE = 1e-9
