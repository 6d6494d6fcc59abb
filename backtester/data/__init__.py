"""
Data loading module.

Reads daily OHLCV CSV files into the ascending, date-unique DataFrame
format used by indicators, strategies and the simulator.
"""
from .loader import DataLoader, DataPreparationError, normalize_ohlcv

__all__ = [
    'DataLoader',
    'DataPreparationError',
    'normalize_ohlcv',
]
