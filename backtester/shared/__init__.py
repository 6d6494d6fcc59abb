"""
Shared types and defaults for the backtester.

This module provides:
- MarketBar, SignalType and TradingSignal
- Centralized default values for all indicator and strategy parameters
"""
from .types import (
    MarketBar,
    SignalType,
    TradingSignal,
    OHLCV_COLUMNS,
    bars_to_frame,
    frame_to_bars,
    get_close_prices,
)
from .defaults import (
    SMA_FAST_PERIOD, SMA_SLOW_PERIOD,
    RSI_PERIOD, RSI_OVERSOLD, RSI_OVERBOUGHT,
    MACD_FAST, MACD_SLOW, MACD_SIGNAL,
    BOLLINGER_PERIOD, BOLLINGER_NUM_STD,
    MOMENTUM_LOOKBACK, MOMENTUM_THRESHOLD,
    SIGNAL_QUANTITY, INITIAL_CAPITAL, TRADING_DAYS_PER_YEAR,
    MAX_GRID_POINTS, MAX_ITERATIONS, OPTIMIZATION_METRIC,
)

__all__ = [
    'MarketBar',
    'SignalType',
    'TradingSignal',
    'OHLCV_COLUMNS',
    'bars_to_frame',
    'frame_to_bars',
    'get_close_prices',
    'SMA_FAST_PERIOD', 'SMA_SLOW_PERIOD',
    'RSI_PERIOD', 'RSI_OVERSOLD', 'RSI_OVERBOUGHT',
    'MACD_FAST', 'MACD_SLOW', 'MACD_SIGNAL',
    'BOLLINGER_PERIOD', 'BOLLINGER_NUM_STD',
    'MOMENTUM_LOOKBACK', 'MOMENTUM_THRESHOLD',
    'SIGNAL_QUANTITY', 'INITIAL_CAPITAL', 'TRADING_DAYS_PER_YEAR',
    'MAX_GRID_POINTS', 'MAX_ITERATIONS', 'OPTIMIZATION_METRIC',
]
