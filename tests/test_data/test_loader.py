"""
Tests for CSV OHLCV loading.
"""
import logging

import pytest
import pandas as pd

from backtester.data.loader import DataLoader, DataPreparationError, normalize_ohlcv
from backtester.shared.types import OHLCV_COLUMNS, MarketBar, bars_to_frame, frame_to_bars


def _write_csv(tmp_path, text, name="prices.csv"):
    path = tmp_path / name
    path.write_text(text)
    return path


CSV = """Date,Open,High,Low,Close,Volume
2021-01-06,12,13,11,12.5,1200
2021-01-04,10,11,9,10.5,1000
2021-01-05,11,12,10,11.5,1100
"""


class TestDataLoader:
    """Test DataLoader."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            DataLoader(tmp_path / "missing.csv")

    def test_load_sorted_ohlcv(self, tmp_path):
        df = DataLoader(_write_csv(tmp_path, CSV)).load()

        assert list(df.columns) == OHLCV_COLUMNS
        assert isinstance(df.index, pd.DatetimeIndex)
        assert df.index.is_monotonic_increasing
        assert df["Close"].tolist() == [10.5, 11.5, 12.5]
        assert df.dtypes.eq(float).all()

    def test_date_filter_inclusive(self, tmp_path):
        df = DataLoader(_write_csv(tmp_path, CSV)).load(start_date="2021-01-05", end_date="2021-01-06")

        assert df.index.strftime('%Y-%m-%d').tolist() == ["2021-01-05", "2021-01-06"]

    def test_case_insensitive_columns_volume_optional(self, tmp_path):
        text = "timestamp,open,high,low,close\n2021-01-04,1,2,0.5,1.5\n"

        df = DataLoader(_write_csv(tmp_path, text)).load()

        assert df["Close"].iloc[0] == 1.5
        assert df["Volume"].iloc[0] == 0.0

    def test_missing_price_column(self, tmp_path):
        text = "Date,Open,High,Low\n2021-01-04,1,2,0.5\n"

        with pytest.raises(DataPreparationError, match="Close"):
            DataLoader(_write_csv(tmp_path, text)).load()

    def test_duplicate_dates(self, tmp_path):
        text = "Date,Open,High,Low,Close\n2021-01-04,1,2,0.5,1.5\n2021-01-04,1,2,0.5,1.6\n"

        with pytest.raises(DataPreparationError, match="Duplicate"):
            DataLoader(_write_csv(tmp_path, text)).load()

    def test_unparsable_dates(self, tmp_path):
        text = "Date,Open,High,Low,Close\nnot-a-date,1,2,0.5,1.5\n"

        with pytest.raises(DataPreparationError, match="dates"):
            DataLoader(_write_csv(tmp_path, text)).load()

    def test_non_numeric_rows_dropped(self, tmp_path, caplog):
        text = "Date,Open,High,Low,Close\n2021-01-04,1,2,0.5,1.5\n2021-01-05,1,2,0.5,n/a\n2021-01-06,1,2,0.5,1.7\n"

        with caplog.at_level(logging.WARNING):
            df = DataLoader(_write_csv(tmp_path, text)).load()

        assert df["Close"].tolist() == [1.5, 1.7]
        assert "Dropping 1 bar" in caplog.text

    def test_header_only_file(self, tmp_path):
        df = DataLoader(_write_csv(tmp_path, "Date,Open,High,Low,Close,Volume\n")).load()

        assert df.empty
        assert list(df.columns) == OHLCV_COLUMNS


class TestBars:
    """Test conversion between bars and frames."""

    def test_normalize_uses_first_column_as_date(self):
        raw = pd.DataFrame({
            "day": ["2021-01-05", "2021-01-04"],
            "Open": [2, 1], "High": [2, 1], "Low": [2, 1], "Close": [2, 1],
        })

        df = normalize_ohlcv(raw)

        assert df.index[0] == pd.Timestamp("2021-01-04")

    def test_bars_frame_round_trip(self):
        bars = [
            MarketBar(pd.Timestamp("2021-01-04"), 1.0, 2.0, 0.5, 1.5, 100.0),
            MarketBar(pd.Timestamp("2021-01-05"), 1.5, 2.5, 1.0, 2.0, 200.0),
        ]

        assert frame_to_bars(bars_to_frame(bars)) == bars
