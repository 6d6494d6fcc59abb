"""
Unified CLI entry points for all backtesting operations.

Provides command-line interfaces for:
- Strategy backtest (cli.backtest)
- Parameter grid search (cli.optimize)
- Parameter reference (cli.params)
"""
