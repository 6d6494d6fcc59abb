"""
Signal generation module.

Strategies turn indicator state into BUY/SELL signals. The set of strategies
lives in a StrategyRegistry that is passed explicitly to the SignalGenerator.
"""
from .config import ConfigurationError, ParameterSpec, StrategyConfig, validate_parameters
from .strategies import PositionState, sma_crossover_signals, rsi_signals, momentum_signals
from .registry import (
    StrategyKind,
    StrategyDefinition,
    StrategyRegistry,
    default_registry,
)
from .generator import SignalGenerator
from .config_loader import RunConfig, load_config_from_yaml

__all__ = [
    'ConfigurationError',
    'ParameterSpec',
    'StrategyConfig',
    'validate_parameters',
    'PositionState',
    'sma_crossover_signals',
    'rsi_signals',
    'momentum_signals',
    'StrategyKind',
    'StrategyDefinition',
    'StrategyRegistry',
    'default_registry',
    'SignalGenerator',
    'RunConfig',
    'load_config_from_yaml',
]
