"""
Portfolio and simulation types: position, equity points, performance report.

Extracted to keep portfolio.py focused on simulation logic.
The optimizer and CLI import these types without pulling in BacktestSimulator.
"""
from __future__ import annotations

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Dict, List

import pandas as pd

from ..shared.types import TradingSignal


@dataclass
class Position:
    """The single open long position."""
    entry_timestamp: pd.Timestamp
    entry_price: float
    quantity: int


@dataclass(frozen=True)
class EquityPoint:
    """Portfolio value (cash + position marked at close) at one bar."""
    timestamp: pd.Timestamp
    value: float


@dataclass(frozen=True)
class PerformanceReport:
    """Performance metrics for one simulation run."""
    total_return_pct: float
    sharpe_ratio: float
    win_rate: float  # Percent of executed entries that closed with a profit
    max_drawdown_pct: float
    total_trades: int  # Executed entries (round trips opened)
    winning_trades: int
    losing_trades: int
    average_win: float  # Currency units
    average_loss: float  # Currency units, positive
    profit_factor: float  # Gross win / gross loss; inf when there are no losses

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


class PerformanceMetric(Enum):
    """Report fields a parameter search can maximize."""
    SHARPE_RATIO = "sharpe_ratio"
    TOTAL_RETURN = "total_return"
    WIN_RATE = "win_rate"

    @classmethod
    def parse(cls, value) -> "PerformanceMetric":
        """
        Accept an enum member, its value, or the camelCase name
        (sharpeRatio, totalReturn, winRate).
        """
        if isinstance(value, cls):
            return value
        aliases = {
            "sharperatio": cls.SHARPE_RATIO,
            "totalreturn": cls.TOTAL_RETURN,
            "winrate": cls.WIN_RATE,
        }
        key = str(value).replace("_", "").replace("-", "").lower()
        if key not in aliases:
            raise ValueError(
                f"Unknown metric '{value}'. Available: {[m.value for m in cls]}"
            )
        return aliases[key]

    def value_of(self, report: PerformanceReport) -> float:
        if self is PerformanceMetric.SHARPE_RATIO:
            return report.sharpe_ratio
        if self is PerformanceMetric.TOTAL_RETURN:
            return report.total_return_pct
        return report.win_rate


@dataclass
class BacktestResult:
    """Results from a backtest simulation."""
    initial_capital: float
    final_equity: float
    performance: PerformanceReport
    equity_curve: List[EquityPoint]  # One point per input bar
    trades: List[TradingSignal]  # Signals that were actually executed
    signals: List[TradingSignal] = field(default_factory=list)  # Signals as supplied

    def equity_series(self) -> pd.Series:
        """Equity curve as a Series indexed by timestamp."""
        return pd.Series(
            [p.value for p in self.equity_curve],
            index=pd.DatetimeIndex([p.timestamp for p in self.equity_curve]),
            name="equity",
            dtype=float,
        )
