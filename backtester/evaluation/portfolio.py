"""
Backtest simulator with a single-position, long-only ledger.

Replays a price series against a list of signals:
- Starts flat with initial capital
- BUY while flat invests all cash in whole units at the signal price
- SELL while long closes the position at the signal price
- Records one equity point (cash + position at close) per bar
"""
import logging
import math
from typing import Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from ..shared.types import SignalType, TradingSignal, get_close_prices
from ..shared.defaults import INITIAL_CAPITAL, TRADING_DAYS_PER_YEAR
from .portfolio_types import Position, EquityPoint, PerformanceReport, BacktestResult

__all__ = [
    "BacktestSimulator",
    "calculate_profit_factor",
    "calculate_sharpe_ratio",
    "calculate_max_drawdown",
]

logger = logging.getLogger(__name__)


def calculate_profit_factor(total_win: float, total_loss: float) -> float:
    """Gross win / gross loss; inf when there are wins but no losses, 0 when neither."""
    if total_loss > 0:
        return total_win / total_loss
    return float('inf') if total_win > 0 else 0.0


def calculate_sharpe_ratio(returns: Sequence[float], periods_per_year: int = TRADING_DAYS_PER_YEAR) -> float:
    """
    Annualized Sharpe ratio of per-trade returns.

    mean / population std * sqrt(periods_per_year); 0 with no returns or zero std.
    A std that is only rounding noise counts as zero.
    """
    if len(returns) == 0:
        return 0.0
    values = np.asarray(returns, dtype=float)
    std = values.std()
    if std <= np.finfo(float).eps * max(1.0, abs(values.mean())) * len(values):
        return 0.0
    return float(values.mean() / std * math.sqrt(periods_per_year))


def calculate_max_drawdown(values: Sequence[float], initial_capital: float) -> float:
    """Maximum percentage drop from the running peak, peak seeded at initial capital."""
    peak = initial_capital
    max_drawdown = 0.0

    for value in values:
        if value > peak:
            peak = value

        drawdown = ((peak - value) / peak) * 100
        if drawdown > max_drawdown:
            max_drawdown = drawdown

    return max_drawdown


def _check_signal_price(sig: TradingSignal, timestamp: pd.Timestamp) -> None:
    """Executed signals need a finite, positive price."""
    if not math.isfinite(sig.price) or sig.price <= 0:
        raise ValueError(
            f"Signal price must be a finite number > 0, got {sig.price} on {timestamp}"
        )


class BacktestSimulator:
    """
    Simulates trading a signal list with a single long position.

    At most one position is open at any time. A BUY while long or a SELL while
    flat is ignored. A BUY that cannot afford a single unit is skipped and the
    ledger stays flat.
    """

    def __init__(self, initial_capital: float = INITIAL_CAPITAL):
        """
        Initialize the simulator.

        Args:
            initial_capital: Starting cash (default: 10000)
        """
        if initial_capital <= 0:
            raise ValueError(f"initial_capital must be > 0, got {initial_capital}")
        self.initial_capital = float(initial_capital)

    def simulate(self, data, signals: List[TradingSignal]) -> BacktestResult:
        """
        Replay signals against the price series, one bar at a time.

        Each bar's signal (if any) is applied before that bar's equity is
        recorded. When several signals share a date the last one in the list
        is used.

        Args:
            data: OHLCV DataFrame or close-price Series, ascending unique dates
            signals: Signals whose timestamps match bars in data

        Returns:
            BacktestResult with report, equity curve and executed trades
        """
        prices = get_close_prices(data)
        if len(prices) == 0:
            return self._empty_result(signals)

        signal_by_date: Dict[pd.Timestamp, TradingSignal] = {}
        for sig in signals:
            timestamp = pd.Timestamp(sig.timestamp)
            if timestamp in signal_by_date:
                logger.debug("Signal on %s replaces earlier signal for the same date", timestamp.date())
            signal_by_date[timestamp] = sig

        cash = self.initial_capital
        position: Optional[Position] = None
        trades: List[TradingSignal] = []
        equity_curve: List[EquityPoint] = []
        trade_returns: List[float] = []

        total_trades = 0
        winning_trades = 0
        losing_trades = 0
        total_win = 0.0
        total_loss = 0.0

        for timestamp, close in prices.items():
            sig = signal_by_date.get(timestamp)

            if sig is not None:
                if sig.signal_type == SignalType.BUY and position is None:
                    _check_signal_price(sig, timestamp)
                    quantity = math.floor(cash / sig.price)
                    if quantity > 0:
                        cash -= quantity * sig.price
                        position = Position(
                            entry_timestamp=timestamp,
                            entry_price=sig.price,
                            quantity=quantity,
                        )
                        trades.append(sig)
                        total_trades += 1
                    else:
                        logger.debug(
                            "Skipping buy on %s: cash %.2f below price %.2f",
                            timestamp, cash, sig.price,
                        )

                elif sig.signal_type == SignalType.SELL and position is not None:
                    _check_signal_price(sig, timestamp)
                    cash += position.quantity * sig.price
                    pnl = position.quantity * sig.price - position.quantity * position.entry_price

                    if pnl > 0:
                        winning_trades += 1
                        total_win += pnl
                    else:
                        losing_trades += 1
                        total_loss += abs(pnl)

                    trade_returns.append((sig.price - position.entry_price) / position.entry_price)
                    trades.append(sig)
                    position = None

            held = position.quantity if position is not None else 0
            equity_curve.append(EquityPoint(timestamp=timestamp, value=cash + held * float(close)))

        # Mark any open position to the last close (no actual sale)
        held = position.quantity if position is not None else 0
        final_equity = cash + held * float(prices.iloc[-1])

        performance = PerformanceReport(
            total_return_pct=((final_equity - self.initial_capital) / self.initial_capital) * 100,
            sharpe_ratio=calculate_sharpe_ratio(trade_returns),
            win_rate=(winning_trades / total_trades * 100) if total_trades > 0 else 0.0,
            max_drawdown_pct=calculate_max_drawdown([p.value for p in equity_curve], self.initial_capital),
            total_trades=total_trades,
            winning_trades=winning_trades,
            losing_trades=losing_trades,
            average_win=(total_win / winning_trades) if winning_trades > 0 else 0.0,
            average_loss=(total_loss / losing_trades) if losing_trades > 0 else 0.0,
            profit_factor=calculate_profit_factor(total_win, total_loss),
        )

        logger.debug(
            "Simulated %d bars: %d trades, return %.2f%%",
            len(prices), total_trades, performance.total_return_pct,
        )

        return BacktestResult(
            initial_capital=self.initial_capital,
            final_equity=final_equity,
            performance=performance,
            equity_curve=equity_curve,
            trades=trades,
            signals=list(signals),
        )

    def _empty_result(self, signals: List[TradingSignal]) -> BacktestResult:
        """Return a zero-valued result for an empty series."""
        return BacktestResult(
            initial_capital=self.initial_capital,
            final_equity=self.initial_capital,
            performance=PerformanceReport(
                total_return_pct=0.0,
                sharpe_ratio=0.0,
                win_rate=0.0,
                max_drawdown_pct=0.0,
                total_trades=0,
                winning_trades=0,
                losing_trades=0,
                average_win=0.0,
                average_loss=0.0,
                profit_factor=0.0,
            ),
            equity_curve=[],
            trades=[],
            signals=list(signals),
        )
