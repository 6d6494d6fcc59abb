"""
Indicator calculation module.

Provides the technical indicators strategies are built from:
SMA, EMA, RSI, MACD and Bollinger Bands.
"""
from .technical import TechnicalIndicators

__all__ = [
    'TechnicalIndicators',
]
