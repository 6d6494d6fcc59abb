#!/usr/bin/env python3
"""
Parameter reference CLI.

Shows every registered strategy with its parameters, valid ranges, grid
step and defaults.
"""
import sys
import argparse

from backtester.signals.config import ConfigurationError
from backtester.signals.registry import default_registry
from backtester.shared.defaults import (
    INITIAL_CAPITAL, TRADING_DAYS_PER_YEAR,
    MAX_GRID_POINTS, MAX_ITERATIONS, OPTIMIZATION_METRIC,
)


def main(argv=None):
    """Print all configurable parameters with their ranges and defaults."""
    parser = argparse.ArgumentParser(
        description="Show strategy parameters, their ranges and defaults",
    )
    parser.add_argument(
        "--strategy", "-s",
        default=None,
        help="Only show this strategy (default: all registered strategies)",
    )
    args = parser.parse_args(argv)

    registry = default_registry()
    try:
        definitions = [registry.get(args.strategy)] if args.strategy else list(registry)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("=" * 80)
    print("STRATEGY PARAMETER REFERENCE")
    print("=" * 80)
    print()

    for definition in definitions:
        print(f"{definition.name}:")
        if definition.description:
            print(f"  {definition.description}")
        for name, spec in definition.parameters.items():
            kind = "int" if spec.integer else "float"
            print(
                f"  {name:<18} default: {spec.coerce(spec.default):<6} "
                f"range: {spec.min:g}-{spec.max:g} (step {spec.step:g}, {kind})"
            )
        print()

    print("BACKTEST / OPTIMIZATION:")
    print("-" * 80)
    print(f"  initial_capital    default: {INITIAL_CAPITAL:g}")
    print(f"  metric             default: {OPTIMIZATION_METRIC} (sharpe_ratio, total_return, win_rate)")
    print(f"  max_iterations     default: {MAX_ITERATIONS}")
    print(f"  grid points        at most {MAX_GRID_POINTS} per parameter")
    print(f"  Sharpe ratio       per-trade returns annualized with sqrt({TRADING_DAYS_PER_YEAR})")
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
