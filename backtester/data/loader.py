"""
CSV loader for daily OHLCV data.

Produces the input every engine component expects:
- DatetimeIndex, strictly ascending, no duplicate dates
- Open/High/Low/Close/Volume float columns
- Bars with unparsable numeric fields dropped (logged)
"""
import logging
import pandas as pd
from pathlib import Path
from typing import Optional, Union
from datetime import datetime

from ..shared.types import OHLCV_COLUMNS

logger = logging.getLogger(__name__)


class DataPreparationError(Exception):
    """Raised when a data file cannot be turned into a valid price series."""
    pass


class DataLoader:
    """
    Loads OHLCV data from a CSV file.

    The first column (or a column named Date) holds the date; the remaining
    columns are matched to Open/High/Low/Close/Volume case-insensitively.
    Volume is optional and defaults to 0.
    """

    def __init__(self, data_path: Union[str, Path]):
        """
        Initialize the data loader.

        Args:
            data_path: Path to the CSV file containing the data
        """
        self.data_path = Path(data_path)
        if not self.data_path.exists():
            raise FileNotFoundError(f"Data file not found: {self.data_path}")

    def load(
        self,
        start_date: Optional[Union[str, datetime, pd.Timestamp]] = None,
        end_date: Optional[Union[str, datetime, pd.Timestamp]] = None,
    ) -> pd.DataFrame:
        """
        Load data from CSV file with optional filtering.

        Args:
            start_date: Start date for filtering (inclusive). If None, no start filter.
            end_date: End date for filtering (inclusive). If None, no end filter.

        Returns:
            DataFrame with datetime index and OHLCV columns

        Raises:
            DataPreparationError: Missing columns, unparsable dates or duplicate dates
        """
        raw = pd.read_csv(self.data_path)
        if raw.empty:
            return pd.DataFrame(columns=OHLCV_COLUMNS, index=pd.DatetimeIndex([], name="Date"), dtype=float)

        df = normalize_ohlcv(raw)

        if start_date is not None:
            df = df[df.index >= pd.to_datetime(start_date)]
        if end_date is not None:
            df = df[df.index <= pd.to_datetime(end_date)]

        logger.info("Loaded %d bars from %s", len(df), self.data_path)
        return df


def normalize_ohlcv(raw: pd.DataFrame) -> pd.DataFrame:
    """
    Turn a raw OHLCV table into the engine's input format.

    Args:
        raw: Table with a date column (named Date/Timestamp or first column) and price columns

    Returns:
        DataFrame indexed by date, ascending
    """
    by_lower = {str(c).strip().lower(): c for c in raw.columns}
    date_col = by_lower.get("date", by_lower.get("timestamp", raw.columns[0]))

    missing = [c for c in OHLCV_COLUMNS[:4] if c.lower() not in by_lower]
    if missing:
        raise DataPreparationError(
            f"Missing column(s) {missing}. Available: {list(raw.columns)}"
        )

    try:
        index = pd.DatetimeIndex(pd.to_datetime(raw[date_col]), name="Date")
    except (ValueError, TypeError) as e:
        raise DataPreparationError(f"Unparsable dates in column '{date_col}': {e}") from e

    df = pd.DataFrame(index=index)
    for column in OHLCV_COLUMNS:
        source = by_lower.get(column.lower())
        if source is None:
            df[column] = 0.0
        else:
            df[column] = pd.to_numeric(raw[source], errors="coerce").to_numpy()

    bad = df[OHLCV_COLUMNS].isna().any(axis=1)
    if bad.any():
        logger.warning("Dropping %d bar(s) with unparsable numeric fields", int(bad.sum()))
        df = df[~bad]

    df = df.sort_index()

    duplicates = df.index[df.index.duplicated()]
    if len(duplicates) > 0:
        raise DataPreparationError(
            f"Duplicate dates in data: {[d.strftime('%Y-%m-%d') for d in duplicates[:5]]}"
        )

    return df.astype(float)
