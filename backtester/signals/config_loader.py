"""
YAML configuration loader for backtest and optimization runs.

Example:

    strategy:
      name: SMA Crossover
      parameters:
        fast_period: 10
        slow_period: 50
    backtest:
      initial_capital: 10000
    optimization:
      metric: sharpe_ratio
      max_iterations: 100
      workers: 1

Missing parameters fall back to the strategy's declared defaults.
"""
import yaml
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .config import ConfigurationError, StrategyConfig
from .registry import StrategyRegistry, default_registry
from ..evaluation.portfolio_types import PerformanceMetric
from ..shared.defaults import INITIAL_CAPITAL, MAX_ITERATIONS, OPTIMIZATION_METRIC


@dataclass
class RunConfig:
    """Everything needed for a backtest or optimization run."""
    strategy: StrategyConfig
    initial_capital: float = INITIAL_CAPITAL
    metric: PerformanceMetric = PerformanceMetric(OPTIMIZATION_METRIC)
    max_iterations: int = MAX_ITERATIONS
    workers: int = 1


def load_config_from_yaml(
    yaml_path: Union[str, Path],
    registry: Optional[StrategyRegistry] = None,
) -> RunConfig:
    """
    Load a run configuration from YAML file.

    Args:
        yaml_path: Path to YAML configuration file
        registry: Registry used to resolve and validate the strategy (default: built-ins)

    Returns:
        RunConfig with validated strategy parameters

    Raises:
        FileNotFoundError: If YAML file doesn't exist
        ValueError: If YAML is empty or missing required fields
        ConfigurationError: If strategy, parameters or optimization settings are invalid
    """
    yaml_path = Path(yaml_path)
    registry = registry if registry is not None else default_registry()

    if not yaml_path.exists():
        raise FileNotFoundError(f"Config file not found: {yaml_path}")

    with open(yaml_path, 'r') as f:
        config_dict = yaml.safe_load(f)

    if not config_dict:
        raise ValueError(f"Empty config file: {yaml_path}")
    if not isinstance(config_dict, dict):
        raise ValueError(f"Config file must contain a mapping: {yaml_path}")

    strategy = config_dict.get('strategy') or {}
    if 'name' not in strategy:
        raise ValueError(f"Missing strategy.name in {yaml_path}")

    definition = registry.get(strategy['name'])
    parameters = definition.resolve_parameters(strategy.get('parameters') or {})

    backtest = config_dict.get('backtest') or {}
    optimization = config_dict.get('optimization') or {}

    initial_capital = backtest.get('initial_capital', INITIAL_CAPITAL)
    if initial_capital <= 0:
        raise ConfigurationError(f"backtest.initial_capital must be > 0, got {initial_capital}")

    try:
        metric = PerformanceMetric.parse(optimization.get('metric', OPTIMIZATION_METRIC))
    except ValueError as e:
        raise ConfigurationError(str(e)) from e

    max_iterations = optimization.get('max_iterations', MAX_ITERATIONS)
    if isinstance(max_iterations, bool) or not isinstance(max_iterations, int):
        raise ConfigurationError(
            f"optimization.max_iterations must be a whole number, got {max_iterations!r}"
        )
    if max_iterations < 1:
        raise ConfigurationError(f"optimization.max_iterations must be >= 1, got {max_iterations}")

    workers = optimization.get('workers', 1)
    if workers < 1:
        raise ConfigurationError(f"optimization.workers must be >= 1, got {workers}")

    return RunConfig(
        strategy=StrategyConfig(name=definition.name, parameters=parameters),
        initial_capital=float(initial_capital),
        metric=metric,
        max_iterations=int(max_iterations),
        workers=int(workers),
    )
