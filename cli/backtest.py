#!/usr/bin/env python3
"""
Backtest CLI.

Runs one strategy configuration against a CSV price file and prints the
performance report.
"""
import sys
import argparse

from backtester.data.loader import DataPreparationError
from backtester.evaluation.portfolio import BacktestSimulator
from backtester.signals.config import ConfigurationError
from backtester.signals.generator import SignalGenerator
from backtester.signals.registry import default_registry
from cli.common import add_run_arguments, load_data, print_report, resolve_run_config, setup_logging


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Backtest a trading strategy on historical daily prices",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # SMA crossover with default parameters
    python -m cli.backtest --data data/spy.csv

    # RSI strategy with custom thresholds
    python -m cli.backtest --data data/spy.csv --strategy "RSI Strategy" -p oversold_level=25

    # Everything from a YAML file
    python -m cli.backtest --data data/spy.csv --config configs/sma_crossover.yaml
        """
    )
    add_run_arguments(parser)
    parser.add_argument(
        "--show-trades",
        action="store_true",
        help="List executed trades after the report",
    )
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    registry = default_registry()
    try:
        run_config = resolve_run_config(args, registry)
        data = load_data(args.data, args.start, args.end)
        signals = SignalGenerator(registry).generate(data, run_config.strategy)
    except (ConfigurationError, DataPreparationError, FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    result = BacktestSimulator(run_config.initial_capital).simulate(data, signals)

    params = ", ".join(f"{k}={v}" for k, v in run_config.strategy.parameters.items())
    print_report(result, f"BACKTEST - {run_config.strategy.name} ({params})")

    if args.show_trades:
        print("EXECUTED TRADES")
        print("-" * 80)
        for trade in result.trades:
            print(
                f"  {trade.timestamp:%Y-%m-%d}  {trade.signal_type.value.upper():<4}  "
                f"{trade.price:>12,.2f}  conf={trade.confidence:.3f}  {trade.reasoning}"
            )
        print()

    return 0


if __name__ == "__main__":
    sys.exit(main())
