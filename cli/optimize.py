#!/usr/bin/env python3
"""
Parameter optimization CLI.

Grid-searches a strategy's parameter ranges on a CSV price file, prints the
best combinations, then re-runs the best one as a confirmation backtest.
"""
import sys
import time
import argparse

from backtester.data.loader import DataPreparationError
from backtester.evaluation.portfolio import BacktestSimulator
from backtester.evaluation.portfolio_types import PerformanceMetric
from backtester.optimization.grid_search import ParameterOptimizer
from backtester.signals.config import ConfigurationError
from backtester.signals.generator import SignalGenerator
from backtester.signals.registry import default_registry
from cli.common import add_run_arguments, load_data, print_report, resolve_run_config, setup_logging


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Grid-search strategy parameters for the best metric value",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Best Sharpe ratio for the SMA crossover, up to 100 combinations
    python -m cli.optimize --data data/spy.csv

    # Best total return for the momentum strategy on 4 processes
    python -m cli.optimize --data data/spy.csv -s "Momentum Strategy" --metric total_return --workers 4
        """
    )
    add_run_arguments(parser)
    parser.add_argument(
        "--metric", "-m",
        default=None,
        choices=[m.value for m in PerformanceMetric],
        help="Metric to maximize (default: config or sharpe_ratio)",
    )
    parser.add_argument(
        "--max-iterations", "-n",
        type=int,
        default=None,
        help="Maximum parameter combinations to evaluate (default: config or 100)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Parallel worker processes (default: config or 1)",
    )
    parser.add_argument(
        "--top",
        type=int,
        default=10,
        help="Number of best combinations to list (default: 10)",
    )
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    registry = default_registry()
    try:
        run_config = resolve_run_config(args, registry)
        metric = PerformanceMetric.parse(args.metric) if args.metric else run_config.metric
        max_iterations = args.max_iterations if args.max_iterations is not None else run_config.max_iterations
        workers = args.workers if args.workers is not None else run_config.workers
        data = load_data(args.data, args.start, args.end)

        simulator = BacktestSimulator(run_config.initial_capital)
        optimizer = ParameterOptimizer(registry, simulator=simulator, workers=workers)
        t0 = time.time()
        result = optimizer.optimize(data, run_config.strategy.name, metric, max_iterations)
        elapsed = time.time() - t0
    except (ConfigurationError, DataPreparationError, FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("=" * 80)
    print(f"OPTIMIZATION - {result.strategy} (maximize {result.metric.value})")
    print("=" * 80)
    print(f"  Combinations evaluated: {len(result.all_results)} ({result.failed_combinations} failed) in {elapsed:.1f}s")
    if not result.all_results:
        print("  No combination could be evaluated.")
        return 1

    best = ", ".join(f"{k}={v}" for k, v in result.best_parameters.items())
    print(f"  Best {result.metric.value}: {result.best_performance:.4f}")
    print(f"  Best parameters: {best}")
    print()
    print(f"TOP {min(args.top, len(result.all_results))}")
    print("-" * 80)
    for rank, entry in enumerate(result.top_results(args.top), 1):
        params = ", ".join(f"{k}={v}" for k, v in entry.parameters.items())
        print(f"  {rank:>3}. {entry.performance:>10.4f}  {params}")
    print()

    # Confirmation run with the winning parameters
    best_config = result.best_config()
    signals = SignalGenerator(registry).generate(data, best_config)
    confirmation = simulator.simulate(data, signals)
    print_report(confirmation, f"CONFIRMATION RUN - {best_config.name} ({best})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
