"""
Backtest evaluation module.

Replays signals against a price series with a single long position and
scores the run.
"""
from .portfolio import (
    BacktestSimulator,
    calculate_profit_factor,
    calculate_sharpe_ratio,
    calculate_max_drawdown,
)
from .portfolio_types import (
    Position,
    EquityPoint,
    PerformanceReport,
    PerformanceMetric,
    BacktestResult,
)

__all__ = [
    'BacktestSimulator',
    'calculate_profit_factor',
    'calculate_sharpe_ratio',
    'calculate_max_drawdown',
    'Position',
    'EquityPoint',
    'PerformanceReport',
    'PerformanceMetric',
    'BacktestResult',
]
