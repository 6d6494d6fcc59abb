"""
Shared types for market data and trading signals.

This module consolidates the bar and signal types used across the
indicator, signal, evaluation and optimization modules so every stage
speaks the same vocabulary.
"""
import pandas as pd
from typing import List, Iterable
from dataclasses import dataclass
from enum import Enum


OHLCV_COLUMNS = ["Open", "High", "Low", "Close", "Volume"]


class SignalType(Enum):
    """Type of trading signal."""
    BUY = "buy"
    SELL = "sell"


@dataclass(frozen=True)
class MarketBar:
    """One daily OHLCV bar."""
    timestamp: pd.Timestamp
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0


@dataclass(frozen=True)
class TradingSignal:
    """
    A buy or sell instruction emitted by a strategy.

    The timestamp must match a bar in the series the signal was generated from.
    Confidence is always present (0.0 when a strategy has nothing to say).
    """
    timestamp: pd.Timestamp
    signal_type: SignalType
    price: float
    quantity: int = 100
    strategy: str = ""
    confidence: float = 0.0
    reasoning: str = ""

    @property
    def is_buy(self) -> bool:
        return self.signal_type == SignalType.BUY


def bars_to_frame(bars: Iterable[MarketBar]) -> pd.DataFrame:
    """Build an OHLCV DataFrame indexed by timestamp from a sequence of bars."""
    bars = list(bars)
    index = pd.DatetimeIndex([pd.Timestamp(b.timestamp) for b in bars], name="Date")
    return pd.DataFrame(
        {
            "Open": [b.open for b in bars],
            "High": [b.high for b in bars],
            "Low": [b.low for b in bars],
            "Close": [b.close for b in bars],
            "Volume": [b.volume for b in bars],
        },
        index=index,
        dtype=float,
    )


def frame_to_bars(data: pd.DataFrame) -> List[MarketBar]:
    """Inverse of bars_to_frame."""
    return [
        MarketBar(
            timestamp=timestamp,
            open=float(row["Open"]),
            high=float(row["High"]),
            low=float(row["Low"]),
            close=float(row["Close"]),
            volume=float(row["Volume"]),
        )
        for timestamp, row in data.iterrows()
    ]


def get_close_prices(data) -> pd.Series:
    """
    Return the close-price series from a DataFrame or pass a Series through.

    Accepts a DataFrame with a 'Close' column, a plain price Series, or a list of MarketBar.
    """
    if isinstance(data, pd.Series):
        return data.astype(float)
    if isinstance(data, pd.DataFrame):
        if "Close" not in data.columns:
            raise ValueError(f"Column 'Close' not found. Available: {list(data.columns)}")
        return data["Close"].astype(float)
    return bars_to_frame(data)["Close"]
