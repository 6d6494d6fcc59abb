"""
Signal rules for the built-in strategies.

Each strategy is a pure function (data, config) -> List[TradingSignal] driven by
a two-state machine that starts FLAT: a BUY is only emitted while FLAT and a
SELL only while LONG. Bars where a needed indicator value is still NaN
(warm-up) are skipped, so short series simply produce no signals.

Parameters are expected to be validated already (see SignalGenerator).
"""
from enum import Enum
from typing import List

import numpy as np
import pandas as pd

from .config import StrategyConfig
from ..indicators.technical import TechnicalIndicators
from ..shared.types import SignalType, TradingSignal, get_close_prices
from ..shared.defaults import SIGNAL_QUANTITY


class PositionState(Enum):
    """Strategy-side view of whether a long position is open."""
    FLAT = "flat"
    LONG = "long"


def _make_signal(
    timestamp: pd.Timestamp,
    signal_type: SignalType,
    price: float,
    config: StrategyConfig,
    confidence: float,
    reasoning: str,
) -> TradingSignal:
    return TradingSignal(
        timestamp=timestamp,
        signal_type=signal_type,
        price=float(price),
        quantity=SIGNAL_QUANTITY,
        strategy=config.name,
        confidence=float(confidence),
        reasoning=reasoning,
    )


def sma_crossover_signals(data, config: StrategyConfig) -> List[TradingSignal]:
    """
    BUY when the fast SMA crosses above the slow SMA, SELL on the reverse cross.

    A cross needs the previous and current bar of both averages, so the scan
    effectively starts one bar after the slow SMA is first defined.
    Confidence is |fast - slow| / slow at the crossing bar.
    """
    prices = get_close_prices(data)
    indicators = TechnicalIndicators()
    fast = indicators.calculate_sma(prices, int(config.parameters["fast_period"])).to_numpy()
    slow = indicators.calculate_sma(prices, int(config.parameters["slow_period"])).to_numpy()
    close = prices.to_numpy(dtype=float)

    signals: List[TradingSignal] = []
    state = PositionState.FLAT

    for i in range(1, len(close)):
        prev_fast, prev_slow = fast[i - 1], slow[i - 1]
        curr_fast, curr_slow = fast[i], slow[i]
        if np.isnan(prev_fast) or np.isnan(prev_slow) or np.isnan(curr_fast) or np.isnan(curr_slow):
            continue

        confidence = abs(curr_fast - curr_slow) / curr_slow
        if state == PositionState.FLAT and prev_fast <= prev_slow and curr_fast > curr_slow:
            signals.append(_make_signal(
                prices.index[i], SignalType.BUY, close[i], config, confidence,
                f"SMA bullish cross ({curr_fast:.2f} > {curr_slow:.2f})",
            ))
            state = PositionState.LONG
        elif state == PositionState.LONG and prev_fast >= prev_slow and curr_fast < curr_slow:
            signals.append(_make_signal(
                prices.index[i], SignalType.SELL, close[i], config, confidence,
                f"SMA bearish cross ({curr_fast:.2f} < {curr_slow:.2f})",
            ))
            state = PositionState.FLAT

    return signals


def rsi_signals(data, config: StrategyConfig) -> List[TradingSignal]:
    """
    BUY when RSI crosses up through the oversold level (exit oversold),
    SELL when RSI crosses down through the overbought level (exit overbought).

    Confidence is how far RSI reached beyond the level, in RSI points / 100.
    """
    prices = get_close_prices(data)
    oversold = float(config.parameters["oversold_level"])
    overbought = float(config.parameters["overbought_level"])
    rsi = TechnicalIndicators().calculate_rsi(prices, int(config.parameters["period"])).to_numpy()
    close = prices.to_numpy(dtype=float)

    signals: List[TradingSignal] = []
    state = PositionState.FLAT

    for i in range(1, len(close)):
        prev_rsi, curr_rsi = rsi[i - 1], rsi[i]
        if np.isnan(prev_rsi) or np.isnan(curr_rsi):
            continue

        if state == PositionState.FLAT and prev_rsi <= oversold < curr_rsi:
            signals.append(_make_signal(
                prices.index[i], SignalType.BUY, close[i], config,
                (oversold - min(prev_rsi, curr_rsi)) / 100,
                f"RSI exit oversold ({curr_rsi:.0f})",
            ))
            state = PositionState.LONG
        elif state == PositionState.LONG and prev_rsi >= overbought > curr_rsi:
            signals.append(_make_signal(
                prices.index[i], SignalType.SELL, close[i], config,
                (max(prev_rsi, curr_rsi) - overbought) / 100,
                f"RSI exit overbought ({curr_rsi:.0f})",
            ))
            state = PositionState.FLAT

    return signals


def momentum_signals(data, config: StrategyConfig) -> List[TradingSignal]:
    """
    BUY when percentage momentum over the lookback exceeds +threshold,
    SELL when it drops below -threshold.

    momentum = (close[i] - close[i - lookback]) / close[i - lookback] * 100
    Confidence is min(|momentum| / threshold, 1).
    """
    prices = get_close_prices(data)
    lookback = int(config.parameters["lookback_period"])
    threshold = float(config.parameters["threshold"])
    close = prices.to_numpy(dtype=float)

    signals: List[TradingSignal] = []
    state = PositionState.FLAT

    for i in range(lookback, len(close)):
        past_price = close[i - lookback]
        if past_price == 0 or np.isnan(past_price) or np.isnan(close[i]):
            continue
        momentum = (close[i] - past_price) / past_price * 100
        confidence = min(abs(momentum) / threshold, 1.0)

        if state == PositionState.FLAT and momentum > threshold:
            signals.append(_make_signal(
                prices.index[i], SignalType.BUY, close[i], config, confidence,
                f"Momentum {momentum:+.2f}% above +{threshold:g}%",
            ))
            state = PositionState.LONG
        elif state == PositionState.LONG and momentum < -threshold:
            signals.append(_make_signal(
                prices.index[i], SignalType.SELL, close[i], config, confidence,
                f"Momentum {momentum:+.2f}% below -{threshold:g}%",
            ))
            state = PositionState.FLAT

    return signals
