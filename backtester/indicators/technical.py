"""
Technical indicators for signal generation.

Provides SMA, EMA, RSI, MACD and Bollinger Bands. Every calculation is a pure
transform of a close-price series: the output has the same index as the input,
with NaN for warm-up positions where the indicator is not yet defined.
"""
import logging
import pandas as pd
import numpy as np
from typing import Optional, Tuple, Union

from ..shared.types import get_close_prices
from ..shared.defaults import (
    SMA_FAST_PERIOD, SMA_SLOW_PERIOD,
    RSI_PERIOD,
    MACD_FAST, MACD_SLOW, MACD_SIGNAL,
    BOLLINGER_PERIOD, BOLLINGER_NUM_STD,
)

logger = logging.getLogger(__name__)


def _check_period(name: str, period) -> int:
    """Periods must be positive integers. Raises ValueError with clear message on failure."""
    if period is None or int(period) != period or period < 1:
        raise ValueError(f"{name} must be a positive integer, got {period}")
    return int(period)


def _rsi_from_averages(avg_gain: float, avg_loss: float) -> float:
    """RSI from Wilder averages; saturates at 100 when there are no losses."""
    if avg_loss == 0:
        return 100.0
    rs = avg_gain / avg_loss
    return 100.0 - (100.0 / (1.0 + rs))


class TechnicalIndicators:
    """Calculates technical indicators from price data."""

    def __init__(
        self,
        sma_fast_period: int = SMA_FAST_PERIOD,  # From shared.defaults
        sma_slow_period: int = SMA_SLOW_PERIOD,  # From shared.defaults
        rsi_period: int = RSI_PERIOD,  # From shared.defaults
        macd_fast: int = MACD_FAST,  # From shared.defaults
        macd_slow: int = MACD_SLOW,  # From shared.defaults
        macd_signal: int = MACD_SIGNAL,  # From shared.defaults
        bollinger_period: int = BOLLINGER_PERIOD,  # From shared.defaults
        bollinger_num_std: float = BOLLINGER_NUM_STD,  # From shared.defaults
    ):
        """
        Initialize indicator calculator.

        The periods given here are only defaults; every calculate_* method
        accepts an explicit period that overrides them.

        Args:
            sma_fast_period: Fast SMA period used by calculate_all
            sma_slow_period: Slow SMA period used by calculate_all
            rsi_period: Period for RSI calculation
            macd_fast: MACD fast EMA period
            macd_slow: MACD slow EMA period
            macd_signal: MACD signal-line EMA period
            bollinger_period: Bollinger Bands moving-average period
            bollinger_num_std: Band half-width in population standard deviations
        """
        self.sma_fast_period = _check_period("sma_fast_period", sma_fast_period)
        self.sma_slow_period = _check_period("sma_slow_period", sma_slow_period)
        self.rsi_period = _check_period("rsi_period", rsi_period)
        self.macd_fast = _check_period("macd_fast", macd_fast)
        self.macd_slow = _check_period("macd_slow", macd_slow)
        self.macd_signal = _check_period("macd_signal", macd_signal)
        self.bollinger_period = _check_period("bollinger_period", bollinger_period)
        self.bollinger_num_std = bollinger_num_std

    def calculate_sma(self, prices: pd.Series, period: int) -> pd.Series:
        """Simple Moving Average; NaN for the first period-1 values."""
        period = _check_period("period", period)
        return prices.rolling(window=period, min_periods=period).mean()

    def calculate_ema(self, prices: pd.Series, period: int) -> pd.Series:
        """
        Calculate Exponential Moving Average.

        Multiplier k = 2 / (period + 1), seeded with the first input value
        (not an SMA seed), so the result is defined from the first position:
        ema[i] = value[i] * k + ema[i-1] * (1 - k)
        """
        period = _check_period("period", period)
        return prices.ewm(span=period, adjust=False).mean()

    def calculate_rsi(self, prices: pd.Series, period: Optional[int] = None) -> pd.Series:
        """
        Calculate Relative Strength Index (RSI) with Wilder smoothing.

        RSI = 100 - (100 / (1 + RS))
        RS = Average Gain / Average Loss

        The first averages are simple means of the first `period` price changes;
        after that avg = (avg * (period - 1) + new) / period. The first `period`
        positions are NaN. Zero average loss gives RSI 100.
        """
        period = _check_period("period", period if period is not None else self.rsi_period)
        values = prices.to_numpy(dtype=float)
        rsi = np.full(len(values), np.nan)
        if len(values) <= period:
            return pd.Series(rsi, index=prices.index)

        delta = np.diff(values)
        gains = np.where(delta > 0, delta, 0.0)
        losses = np.where(delta < 0, -delta, 0.0)

        avg_gain = gains[:period].mean()
        avg_loss = losses[:period].mean()
        rsi[period] = _rsi_from_averages(avg_gain, avg_loss)

        # delta[i] is the change into bar i + 1
        for i in range(period, len(delta)):
            avg_gain = (avg_gain * (period - 1) + gains[i]) / period
            avg_loss = (avg_loss * (period - 1) + losses[i]) / period
            rsi[i + 1] = _rsi_from_averages(avg_gain, avg_loss)

        return pd.Series(rsi, index=prices.index)

    def calculate_macd(
        self,
        prices: pd.Series,
        fast: Optional[int] = None,
        slow: Optional[int] = None,
        signal: Optional[int] = None,
    ) -> Tuple[pd.Series, pd.Series, pd.Series]:
        """
        Calculate MACD (Moving Average Convergence Divergence).

        Returns:
            Tuple of (MACD line, Signal line, Histogram)
        """
        fast = fast if fast is not None else self.macd_fast
        slow = slow if slow is not None else self.macd_slow
        signal = signal if signal is not None else self.macd_signal

        macd_line = self.calculate_ema(prices, fast) - self.calculate_ema(prices, slow)
        signal_line = self.calculate_ema(macd_line, signal)
        histogram = macd_line - signal_line

        return macd_line, signal_line, histogram

    def calculate_bollinger_bands(
        self,
        prices: pd.Series,
        period: Optional[int] = None,
        num_std: Optional[float] = None,
    ) -> Tuple[pd.Series, pd.Series, pd.Series]:
        """
        Calculate Bollinger Bands.

        Middle band is the SMA; the half-width is num_std times the population
        standard deviation of the same trailing window.

        Returns:
            Tuple of (upper band, middle band, lower band)
        """
        period = _check_period("period", period if period is not None else self.bollinger_period)
        num_std = num_std if num_std is not None else self.bollinger_num_std

        middle = self.calculate_sma(prices, period)
        std = prices.rolling(window=period, min_periods=period).std(ddof=0)
        upper = middle + num_std * std
        lower = middle - num_std * std

        return upper, middle, lower

    def calculate_all(self, data: Union[pd.Series, pd.DataFrame]) -> pd.DataFrame:
        """
        Calculate all indicators and return as DataFrame.

        Args:
            data: Price series or DataFrame with a Close column

        Returns:
            DataFrame with all indicator values (same index as input)
        """
        prices = get_close_prices(data)
        df = pd.DataFrame(index=prices.index)
        df["price"] = prices

        df["sma_fast"] = self.calculate_sma(prices, self.sma_fast_period)
        df["sma_slow"] = self.calculate_sma(prices, self.sma_slow_period)
        df["rsi"] = self.calculate_rsi(prices)

        macd_line, signal_line, histogram = self.calculate_macd(prices)
        df["macd_line"] = macd_line
        df["macd_signal"] = signal_line
        df["macd_histogram"] = histogram

        upper, middle, lower = self.calculate_bollinger_bands(prices)
        df["bb_upper"] = upper
        df["bb_middle"] = middle
        df["bb_lower"] = lower

        logger.debug("Calculated indicators for %d bars", len(df))
        return df
