"""
Strategy registry.

The set of strategies is closed: StrategyKind enumerates them and each
StrategyDefinition carries the parameter schema and the signal function for
one kind. A StrategyRegistry is built explicitly (default_registry()) and
handed to the SignalGenerator and ParameterOptimizer that need it.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterator, List, Mapping, Optional

from .config import ConfigurationError, ParameterSpec, StrategyConfig, validate_parameters
from .strategies import sma_crossover_signals, rsi_signals, momentum_signals
from ..shared.defaults import (
    SMA_FAST_PERIOD, SMA_SLOW_PERIOD,
    RSI_PERIOD, RSI_OVERSOLD, RSI_OVERBOUGHT,
    MOMENTUM_LOOKBACK, MOMENTUM_THRESHOLD,
)


class StrategyKind(Enum):
    """Built-in strategies, valued by their display name."""
    SMA_CROSSOVER = "SMA Crossover"
    RSI = "RSI Strategy"
    MOMENTUM = "Momentum Strategy"


@dataclass(frozen=True)
class StrategyDefinition:
    """Parameter schema and signal function for one strategy kind."""
    kind: StrategyKind
    parameters: Dict[str, ParameterSpec]  # Declaration order is grid order
    generate: Callable
    description: str = ""

    @property
    def name(self) -> str:
        return self.kind.value

    def default_parameters(self) -> Dict[str, float]:
        return {name: spec.coerce(spec.default) for name, spec in self.parameters.items()}

    def default_config(self) -> StrategyConfig:
        return StrategyConfig(name=self.name, parameters=self.default_parameters())

    def resolve_parameters(self, overrides: Optional[Mapping[str, float]] = None) -> Dict[str, float]:
        """Defaults with overrides applied, validated."""
        parameters = self.default_parameters()
        parameters.update(overrides or {})
        return self.validate(parameters)

    def validate(self, parameters: Mapping[str, float]) -> Dict[str, float]:
        return validate_parameters(self.name, parameters, self.parameters)


class StrategyRegistry:
    """Name -> StrategyDefinition lookup, in registration order."""

    def __init__(self, definitions: Optional[List[StrategyDefinition]] = None):
        self._definitions: Dict[str, StrategyDefinition] = {}
        for definition in definitions or []:
            self.register(definition)

    def register(self, definition: StrategyDefinition) -> None:
        if definition.name in self._definitions:
            raise ValueError(f"Strategy '{definition.name}' is already registered")
        self._definitions[definition.name] = definition

    def get(self, name) -> StrategyDefinition:
        """
        Look up a strategy by display name or StrategyKind.

        Raises:
            ConfigurationError: If the strategy is not registered
        """
        key = name.value if isinstance(name, StrategyKind) else name
        try:
            return self._definitions[key]
        except KeyError:
            raise ConfigurationError(
                f"Strategy '{key}' not found. Available: {self.names()}"
            ) from None

    def names(self) -> List[str]:
        return list(self._definitions)

    def __contains__(self, name) -> bool:
        key = name.value if isinstance(name, StrategyKind) else name
        return key in self._definitions

    def __iter__(self) -> Iterator[StrategyDefinition]:
        return iter(self._definitions.values())

    def __len__(self) -> int:
        return len(self._definitions)


SMA_CROSSOVER = StrategyDefinition(
    kind=StrategyKind.SMA_CROSSOVER,
    parameters={
        "fast_period": ParameterSpec(min=5, max=50, step=1, default=SMA_FAST_PERIOD, integer=True),
        "slow_period": ParameterSpec(min=10, max=200, step=1, default=SMA_SLOW_PERIOD, integer=True),
    },
    generate=sma_crossover_signals,
    description="Buy when the fast SMA crosses above the slow SMA, sell on the reverse cross",
)

RSI_STRATEGY = StrategyDefinition(
    kind=StrategyKind.RSI,
    parameters={
        "period": ParameterSpec(min=5, max=30, step=1, default=RSI_PERIOD, integer=True),
        "oversold_level": ParameterSpec(min=10, max=40, step=1, default=RSI_OVERSOLD),
        "overbought_level": ParameterSpec(min=60, max=90, step=1, default=RSI_OVERBOUGHT),
    },
    generate=rsi_signals,
    description="Buy when RSI leaves oversold, sell when RSI leaves overbought",
)

MOMENTUM_STRATEGY = StrategyDefinition(
    kind=StrategyKind.MOMENTUM,
    parameters={
        "lookback_period": ParameterSpec(min=5, max=50, step=1, default=MOMENTUM_LOOKBACK, integer=True),
        "threshold": ParameterSpec(min=1, max=10, step=0.1, default=MOMENTUM_THRESHOLD),
    },
    generate=momentum_signals,
    description="Buy on momentum above +threshold %, sell on momentum below -threshold %",
)


def default_registry() -> StrategyRegistry:
    """Registry with the three built-in strategies."""
    return StrategyRegistry([SMA_CROSSOVER, RSI_STRATEGY, MOMENTUM_STRATEGY])
