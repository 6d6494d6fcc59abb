"""
Strategy configuration for trading signals.

Contains the per-parameter schema (ParameterSpec), the concrete strategy
selection (StrategyConfig) and the validation that runs before any signal is
generated (fail fast with clear errors).
"""
import numbers
from dataclasses import dataclass, field
from typing import Dict, Mapping


class ConfigurationError(ValueError):
    """Raised when a strategy name, parameter or optimizer setting is invalid."""
    pass


@dataclass(frozen=True)
class ParameterSpec:
    """Declared range of one strategy parameter."""
    min: float
    max: float
    step: float
    default: float
    integer: bool = False  # Values must be whole numbers (periods, lookbacks)

    def __post_init__(self) -> None:
        if self.min > self.max:
            raise ValueError(f"ParameterSpec min ({self.min}) must be <= max ({self.max})")
        if self.step <= 0:
            raise ValueError(f"ParameterSpec step must be > 0, got {self.step}")
        if not (self.min <= self.default <= self.max):
            raise ValueError(
                f"ParameterSpec default ({self.default}) must be within [{self.min}, {self.max}]"
            )

    def coerce(self, value: float) -> float:
        """Return value as int for integer parameters, float otherwise."""
        return int(round(value)) if self.integer else float(value)


@dataclass
class StrategyConfig:
    """A named strategy with concrete parameter values."""
    name: str
    parameters: Dict[str, float] = field(default_factory=dict)


def validate_parameters(
    strategy_name: str,
    parameters: Mapping[str, float],
    specs: Mapping[str, ParameterSpec],
) -> Dict[str, float]:
    """
    Check parameters against their declared specs.

    Every declared parameter must be present, within [min, max] and, for
    integer parameters, a whole number. Unknown parameters are rejected.

    Returns:
        New dict with values coerced to int/float per spec, in declaration order

    Raises:
        ConfigurationError: On the first invalid parameter
    """
    unknown = sorted(set(parameters) - set(specs))
    if unknown:
        raise ConfigurationError(
            f"Unknown parameter(s) for '{strategy_name}': {unknown}. Expected: {list(specs)}"
        )

    validated: Dict[str, float] = {}
    for name, spec in specs.items():
        if name not in parameters:
            raise ConfigurationError(f"Missing parameter '{name}' for '{strategy_name}'")
        value = parameters[name]
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise ConfigurationError(
                f"Parameter '{name}' for '{strategy_name}' must be a number, got {value!r}"
            )
        if not (spec.min <= value <= spec.max):
            raise ConfigurationError(
                f"Parameter '{name}' for '{strategy_name}' must be in "
                f"[{spec.min}, {spec.max}], got {value}"
            )
        if spec.integer and float(value) != int(value):
            raise ConfigurationError(
                f"Parameter '{name}' for '{strategy_name}' must be a whole number, got {value}"
            )
        validated[name] = spec.coerce(value)
    return validated
