"""
Grid search over a strategy's declared parameter space.

Each parameter gets an evenly spaced grid of at most MAX_GRID_POINTS values
spanning [min, max]. Combinations are walked in declaration order (last
parameter varies fastest) and the walk stops as soon as max_iterations
combinations have been produced, before any of them is evaluated.
"""
import logging
import math
import numbers
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from functools import partial
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from ..evaluation.portfolio import BacktestSimulator
from ..evaluation.portfolio_types import PerformanceMetric
from ..shared.defaults import MAX_GRID_POINTS, MAX_ITERATIONS, OPTIMIZATION_METRIC
from ..signals.config import ConfigurationError, ParameterSpec, StrategyConfig
from ..signals.generator import SignalGenerator
from ..signals.registry import StrategyDefinition, StrategyRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParameterResult:
    """Metric value achieved by one parameter combination."""
    parameters: Dict[str, float]
    performance: float


@dataclass
class OptimizationResult:
    """Outcome of a parameter search."""
    strategy: str
    metric: PerformanceMetric
    best_parameters: Dict[str, float]
    best_performance: float  # -inf when no combination could be evaluated
    all_results: List[ParameterResult] = field(default_factory=list)
    failed_combinations: int = 0

    def best_config(self) -> StrategyConfig:
        """StrategyConfig for a confirmation run with the best parameters."""
        return StrategyConfig(name=self.strategy, parameters=dict(self.best_parameters))

    def top_results(self, n: int = 10) -> List[ParameterResult]:
        """Best n results, ties kept in evaluation order."""
        return sorted(self.all_results, key=lambda r: r.performance, reverse=True)[:n]


def build_parameter_grid(spec: ParameterSpec, max_points: int = MAX_GRID_POINTS) -> List[float]:
    """
    Evenly spaced values spanning [spec.min, spec.max] inclusive.

    Number of points is min(max_points, floor((max - min) / step) + 1); a range
    that holds fewer than two steps gives the single value spec.min. Integer
    parameters are rounded and de-duplicated.
    """
    steps = min(max_points, math.floor((spec.max - spec.min) / spec.step) + 1)
    if steps < 2:
        return [spec.coerce(spec.min)]

    step_size = (spec.max - spec.min) / (steps - 1)
    raw = [spec.min + i * step_size for i in range(steps - 1)] + [spec.max]

    grid: List[float] = []
    for value in raw:
        value = spec.coerce(value)
        if value not in grid:
            grid.append(value)
    return grid


def iter_parameter_combinations(
    grids: Sequence[Sequence[float]],
    limit: int,
) -> Iterator[Tuple[float, ...]]:
    """
    Cartesian product of grids, left-to-right with the last grid fastest,
    stopping after `limit` combinations.

    Iterative odometer walk with an explicit counter; nothing past the limit
    is produced.
    """
    if limit < 1 or any(len(grid) == 0 for grid in grids):
        return

    indices = [0] * len(grids)
    count = 0
    while count < limit:
        yield tuple(grid[i] for grid, i in zip(grids, indices))
        count += 1

        position = len(indices) - 1
        while position >= 0:
            indices[position] += 1
            if indices[position] < len(grids[position]):
                break
            indices[position] = 0
            position -= 1
        if position < 0:
            return


def _evaluate_combination(
    generator: SignalGenerator,
    simulator: BacktestSimulator,
    data,
    strategy_name: str,
    metric: PerformanceMetric,
    parameters: Dict[str, float],
) -> Optional[float]:
    """Run one combination; None if signal generation or simulation fails."""
    try:
        signals = generator.generate(data, StrategyConfig(name=strategy_name, parameters=parameters))
        result = simulator.simulate(data, signals)
        return metric.value_of(result.performance)
    except Exception as e:
        logger.warning(
            "Skipping %s %s: %s: %s", strategy_name, parameters, type(e).__name__, e
        )
        return None


class ParameterOptimizer:
    """
    Exhaustive grid search for the parameters that maximize a metric.

    A combination that fails is logged and left out of the results; the
    search always runs to completion.
    """

    def __init__(
        self,
        registry: StrategyRegistry,
        simulator: Optional[BacktestSimulator] = None,
        workers: int = 1,
        max_grid_points: int = MAX_GRID_POINTS,
    ):
        """
        Initialize the optimizer.

        Args:
            registry: Strategies available for optimization
            simulator: Simulator used for every combination (default: BacktestSimulator())
            workers: Worker processes for evaluation; 1 = sequential
            max_grid_points: Per-parameter grid size cap
        """
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        self.registry = registry
        self.simulator = simulator if simulator is not None else BacktestSimulator()
        self.generator = SignalGenerator(registry)
        self.workers = workers
        self.max_grid_points = max_grid_points

    def parameter_grids(self, definition: StrategyDefinition) -> Dict[str, List[float]]:
        """Grid per parameter, in declaration order."""
        return {
            name: build_parameter_grid(spec, self.max_grid_points)
            for name, spec in definition.parameters.items()
        }

    def optimize(
        self,
        data,
        strategy_name: str,
        metric=OPTIMIZATION_METRIC,
        max_iterations: int = MAX_ITERATIONS,
    ) -> OptimizationResult:
        """
        Search the strategy's parameter grid.

        Args:
            data: OHLCV DataFrame or close-price Series
            strategy_name: Registered strategy name
            metric: PerformanceMetric or its name (sharpe_ratio, total_return, win_rate)
            max_iterations: Maximum number of combinations evaluated

        Returns:
            OptimizationResult; ties keep the first combination found

        Raises:
            ConfigurationError: Unknown strategy or metric, or max_iterations not a whole number >= 1
        """
        definition = self.registry.get(strategy_name)
        try:
            metric = PerformanceMetric.parse(metric)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e
        if (isinstance(max_iterations, bool) or not isinstance(max_iterations, numbers.Real)
                or not math.isfinite(max_iterations) or float(max_iterations) != int(max_iterations)):
            raise ConfigurationError(f"max_iterations must be a whole number, got {max_iterations!r}")
        max_iterations = int(max_iterations)
        if max_iterations < 1:
            raise ConfigurationError(f"max_iterations must be >= 1, got {max_iterations}")

        grids = self.parameter_grids(definition)
        names = list(grids)
        combinations = [
            dict(zip(names, combo))
            for combo in iter_parameter_combinations(list(grids.values()), max_iterations)
        ]
        logger.info(
            "Optimizing %s for %s: %d combinations (workers=%d)",
            definition.name, metric.value, len(combinations), self.workers,
        )

        evaluate = partial(
            _evaluate_combination, self.generator, self.simulator, data, definition.name, metric
        )
        if self.workers > 1 and len(combinations) > 1:
            chunksize = max(1, len(combinations) // (self.workers * 4))
            with ProcessPoolExecutor(max_workers=self.workers) as executor:
                performances = list(executor.map(evaluate, combinations, chunksize=chunksize))
        else:
            performances = [evaluate(parameters) for parameters in combinations]

        result = OptimizationResult(
            strategy=definition.name,
            metric=metric,
            best_parameters={},
            best_performance=float('-inf'),
        )
        for parameters, performance in zip(combinations, performances):
            if performance is None:
                result.failed_combinations += 1
                continue
            result.all_results.append(ParameterResult(parameters=dict(parameters), performance=performance))
            if performance > result.best_performance:
                result.best_performance = performance
                result.best_parameters = dict(parameters)

        logger.info(
            "Best %s = %.4f with %s (%d evaluated, %d failed)",
            metric.value, result.best_performance, result.best_parameters,
            len(result.all_results), result.failed_combinations,
        )
        return result
