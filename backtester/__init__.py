"""
Strategy backtester.

Provides unified interfaces for:
- Indicator calculations (SMA, EMA, RSI, MACD, Bollinger Bands)
- Signal generation (SMA crossover, RSI, momentum strategies)
- Single-position backtest simulation and performance metrics
- Grid search over strategy parameters
- CSV data loading
"""
