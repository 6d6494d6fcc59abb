"""
Centralized default values for indicator, strategy and simulation parameters.

This is the SINGLE SOURCE OF TRUTH for all parameter defaults.
All modules should import from here to ensure consistency.
"""

# SMA crossover defaults
SMA_FAST_PERIOD = 10
SMA_SLOW_PERIOD = 50

# RSI (Relative Strength Index) defaults
RSI_PERIOD = 14
RSI_OVERSOLD = 30
RSI_OVERBOUGHT = 70

# MACD (Moving Average Convergence Divergence) defaults
MACD_FAST = 12
MACD_SLOW = 26
MACD_SIGNAL = 9

# Bollinger Bands defaults
BOLLINGER_PERIOD = 20
BOLLINGER_NUM_STD = 2.0

# Momentum defaults
MOMENTUM_LOOKBACK = 20
MOMENTUM_THRESHOLD = 5.0  # percent

# Signals
SIGNAL_QUANTITY = 100  # Nominal size stamped on signals; the simulator sizes positions itself

# Backtest defaults
INITIAL_CAPITAL = 10000.0
TRADING_DAYS_PER_YEAR = 252  # Sharpe annualization factor

# Grid search defaults
MAX_GRID_POINTS = 10  # Per-parameter cap on grid size
MAX_ITERATIONS = 100
OPTIMIZATION_METRIC = "sharpe_ratio"
