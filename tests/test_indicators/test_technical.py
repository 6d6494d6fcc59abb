"""
Tests for technical indicators (SMA, EMA, RSI, MACD, Bollinger Bands).
"""
import pytest
import pandas as pd
import numpy as np
from backtester.indicators.technical import TechnicalIndicators


@pytest.fixture
def sample_prices():
    """Create sample price data for testing."""
    rng = np.random.default_rng(42)
    dates = pd.date_range('2020-01-01', periods=100, freq='D')
    # Create simple uptrend with noise
    prices = pd.Series(
        100 + np.arange(100) * 0.5 + rng.normal(0, 2, 100),
        index=dates
    )
    return prices


def _series(values):
    return pd.Series(values, index=pd.date_range('2020-01-01', periods=len(values), freq='D'), dtype=float)


class TestSMA:
    """Test SMA calculation."""

    def test_sma_values(self):
        """SMA is the trailing mean, NaN for the first period-1 values."""
        sma = TechnicalIndicators().calculate_sma(_series([1, 2, 3, 4, 5, 6]), 3)

        assert sma.iloc[:2].isna().all()
        assert sma.iloc[2:].tolist() == pytest.approx([2.0, 3.0, 4.0, 5.0])

    def test_sma_length(self, sample_prices):
        """SMA should have same length and index as input."""
        sma = TechnicalIndicators().calculate_sma(sample_prices, 20)

        assert len(sma) == len(sample_prices)
        assert sma.index.equals(sample_prices.index)
        assert sma.isna().sum() == 19

    def test_sma_series_shorter_than_period(self):
        """Insufficient data is not an error: everything is NaN."""
        sma = TechnicalIndicators().calculate_sma(_series([1, 2, 3]), 5)

        assert len(sma) == 3
        assert sma.isna().all()

    @pytest.mark.parametrize("period", [0, -3, 2.5])
    def test_invalid_period(self, sample_prices, period):
        with pytest.raises(ValueError, match="positive integer"):
            TechnicalIndicators().calculate_sma(sample_prices, period)


class TestEMA:
    """Test EMA calculation."""

    def test_ema_seeded_with_first_value(self):
        """EMA starts at the first value and follows value*k + prev*(1-k)."""
        ema = TechnicalIndicators().calculate_ema(_series([10, 20, 20]), 3)

        # k = 2 / (3 + 1) = 0.5
        assert ema.tolist() == pytest.approx([10.0, 15.0, 17.5])

    def test_ema_has_no_warmup(self, sample_prices):
        ema = TechnicalIndicators().calculate_ema(sample_prices, 20)

        assert not ema.isna().any()

    def test_ema_smoothing(self, sample_prices):
        """EMA should be smoother than raw prices."""
        ema = TechnicalIndicators().calculate_ema(sample_prices, period=20)

        price_changes = sample_prices.diff().dropna()
        ema_changes = ema.diff().dropna()

        assert ema_changes.std() < price_changes.std()


class TestRSI:
    """Test RSI calculation."""

    def test_rsi_wilder_values(self):
        """Initial averages are simple means, then Wilder smoothing."""
        rsi = TechnicalIndicators().calculate_rsi(_series([1, 2, 1, 2, 1]), period=2)

        assert rsi.iloc[:2].isna().all()
        # avg gain 0.5 / avg loss 0.5 -> 50
        assert rsi.iloc[2] == pytest.approx(50.0)
        # gain 0.75 / loss 0.25 -> RS 3 -> 75
        assert rsi.iloc[3] == pytest.approx(75.0)
        # gain 0.375 / loss 0.625 -> RS 0.6 -> 37.5
        assert rsi.iloc[4] == pytest.approx(37.5)

    def test_rsi_range(self, sample_prices):
        """RSI should be between 0 and 100."""
        rsi = TechnicalIndicators().calculate_rsi(sample_prices)

        valid_rsi = rsi.dropna()
        assert valid_rsi.min() >= 0
        assert valid_rsi.max() <= 100

    def test_rsi_warmup(self, sample_prices):
        """First `period` values are NaN, the rest defined."""
        rsi = TechnicalIndicators().calculate_rsi(sample_prices, period=14)

        assert len(rsi) == len(sample_prices)
        assert rsi.iloc[:14].isna().all()
        assert not rsi.iloc[14:].isna().any()

    def test_rsi_saturates_without_losses(self):
        """Zero average loss gives 100 instead of a division error."""
        rsi = TechnicalIndicators().calculate_rsi(_series(np.arange(1, 31)), period=14)

        assert (rsi.dropna() == 100.0).all()

    def test_rsi_zero_without_gains(self):
        rsi = TechnicalIndicators().calculate_rsi(_series(np.arange(30, 0, -1)), period=14)

        assert (rsi.dropna() == 0.0).all()

    def test_rsi_short_series(self):
        rsi = TechnicalIndicators().calculate_rsi(_series([1, 2, 3]), period=14)

        assert rsi.isna().all()

    def test_rsi_period(self, sample_prices):
        """Different periods should give different results."""
        indicators = TechnicalIndicators()

        rsi7 = indicators.calculate_rsi(sample_prices, 7)
        rsi14 = indicators.calculate_rsi(sample_prices, 14)

        assert not rsi7.iloc[14:].equals(rsi14.iloc[14:])


class TestMACD:
    """Test MACD calculation."""

    def test_macd_components(self, sample_prices):
        """MACD should return three components aligned with input."""
        macd_line, signal_line, histogram = TechnicalIndicators().calculate_macd(sample_prices)

        assert len(macd_line) == len(sample_prices)
        assert len(signal_line) == len(sample_prices)
        assert len(histogram) == len(sample_prices)

    def test_macd_definition(self, sample_prices):
        """MACD = EMA(fast) - EMA(slow); signal = EMA(MACD); histogram = MACD - signal."""
        indicators = TechnicalIndicators()
        macd_line, signal_line, histogram = indicators.calculate_macd(sample_prices, 12, 26, 9)

        expected_macd = indicators.calculate_ema(sample_prices, 12) - indicators.calculate_ema(sample_prices, 26)
        np.testing.assert_allclose(macd_line.values, expected_macd.values)
        np.testing.assert_allclose(signal_line.values, indicators.calculate_ema(macd_line, 9).values)
        np.testing.assert_allclose(histogram.values, (macd_line - signal_line).values)

    def test_macd_defaults(self, sample_prices):
        indicators = TechnicalIndicators(macd_fast=5, macd_slow=10, macd_signal=3)
        default_line, _, _ = indicators.calculate_macd(sample_prices)
        explicit_line, _, _ = indicators.calculate_macd(sample_prices, 5, 10, 3)

        assert default_line.equals(explicit_line)


class TestBollingerBands:
    """Test Bollinger Bands calculation."""

    def test_bands_use_population_std(self, sample_prices):
        upper, middle, lower = TechnicalIndicators().calculate_bollinger_bands(sample_prices, 20, 2)

        window = sample_prices.iloc[-20:].to_numpy()
        assert middle.iloc[-1] == pytest.approx(window.mean())
        assert upper.iloc[-1] == pytest.approx(window.mean() + 2 * window.std(ddof=0))
        assert lower.iloc[-1] == pytest.approx(window.mean() - 2 * window.std(ddof=0))

    def test_bands_collapse_on_constant_prices(self):
        upper, middle, lower = TechnicalIndicators().calculate_bollinger_bands(_series([5.0] * 10), 4)

        assert upper.iloc[3:].tolist() == pytest.approx([5.0] * 7)
        assert lower.iloc[3:].tolist() == pytest.approx([5.0] * 7)
        assert middle.iloc[:3].isna().all()

    def test_band_order(self, sample_prices):
        upper, middle, lower = TechnicalIndicators().calculate_bollinger_bands(sample_prices)

        valid = middle.notna()
        assert (upper[valid] >= middle[valid]).all()
        assert (middle[valid] >= lower[valid]).all()


class TestCalculateAll:
    """Test combined indicator frame."""

    def test_columns(self, sample_prices):
        df = TechnicalIndicators().calculate_all(sample_prices)

        for column in ["price", "sma_fast", "sma_slow", "rsi", "macd_line", "macd_signal",
                       "macd_histogram", "bb_upper", "bb_middle", "bb_lower"]:
            assert column in df.columns
        assert df.index.equals(sample_prices.index)

    def test_accepts_ohlcv_frame(self, sample_prices):
        frame = pd.DataFrame({"Close": sample_prices})
        df = TechnicalIndicators().calculate_all(frame)

        assert df["price"].equals(sample_prices.astype(float))
