"""
Helpers shared by the CLI entry points: logging setup, data loading,
run-config resolution and report printing.
"""
import sys
import logging
import argparse
from pathlib import Path
from typing import List, Optional

import pandas as pd

from backtester.data.loader import DataLoader
from backtester.evaluation.portfolio_types import BacktestResult
from backtester.shared.defaults import INITIAL_CAPITAL
from backtester.signals.config import ConfigurationError, StrategyConfig
from backtester.signals.config_loader import RunConfig, load_config_from_yaml
from backtester.signals.registry import StrategyKind, StrategyRegistry


def setup_logging(verbose: bool = False):
    """
    Setup logging to stderr.

    Args:
        verbose: If True, use DEBUG level, otherwise INFO
    """
    level = logging.DEBUG if verbose else logging.INFO

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)


def add_run_arguments(parser: argparse.ArgumentParser) -> None:
    """Arguments shared by backtest and optimize."""
    parser.add_argument(
        "--data", "-d",
        required=True,
        help="CSV file with Date, Open, High, Low, Close[, Volume] columns",
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        help="YAML run configuration (strategy, backtest, optimization sections)",
    )
    parser.add_argument(
        "--strategy", "-s",
        default=None,
        help=f"Strategy name, overrides config (default: {StrategyKind.SMA_CROSSOVER.value})",
    )
    parser.add_argument(
        "--param", "-p",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Strategy parameter override, repeatable (e.g. -p fast_period=5)",
    )
    parser.add_argument(
        "--initial-capital",
        type=float,
        default=None,
        help=f"Starting capital (default: config or {INITIAL_CAPITAL:g})",
    )
    parser.add_argument("--start", default=None, help="First date to include (YYYY-MM-DD)")
    parser.add_argument("--end", default=None, help="Last date to include (YYYY-MM-DD)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")


def parse_param_overrides(values: List[str]) -> dict:
    """Parse NAME=VALUE strings into a dict of floats (ints when whole)."""
    overrides = {}
    for item in values:
        if "=" not in item:
            raise ConfigurationError(f"Parameter override must be NAME=VALUE, got '{item}'")
        name, raw = item.split("=", 1)
        try:
            value = float(raw)
        except ValueError:
            raise ConfigurationError(f"Parameter '{name}' must be a number, got '{raw}'") from None
        overrides[name.strip()] = int(value) if value.is_integer() else value
    return overrides


def resolve_run_config(args: argparse.Namespace, registry: StrategyRegistry) -> RunConfig:
    """Config file first, then CLI overrides (CLI > config > defaults)."""
    if args.config:
        run_config = load_config_from_yaml(args.config, registry)
    else:
        definition = registry.get(StrategyKind.SMA_CROSSOVER)
        run_config = RunConfig(strategy=definition.default_config())

    overrides = parse_param_overrides(args.param)
    if args.strategy and args.strategy != run_config.strategy.name:
        definition = registry.get(args.strategy)
        parameters = definition.resolve_parameters(overrides)
    else:
        definition = registry.get(run_config.strategy.name)
        parameters = definition.resolve_parameters({**run_config.strategy.parameters, **overrides})
    run_config.strategy = StrategyConfig(name=definition.name, parameters=parameters)

    if args.initial_capital is not None:
        if args.initial_capital <= 0:
            raise ConfigurationError(f"--initial-capital must be > 0, got {args.initial_capital}")
        run_config.initial_capital = args.initial_capital
    return run_config


def load_data(path: str, start: Optional[str] = None, end: Optional[str] = None) -> pd.DataFrame:
    return DataLoader(Path(path)).load(start_date=start, end_date=end)


def print_report(result: BacktestResult, title: str) -> None:
    """Print the performance report in a fixed-width table."""
    perf = result.performance
    print("=" * 80)
    print(title)
    print("=" * 80)
    print(f"  Initial capital:   {result.initial_capital:,.2f}")
    print(f"  Final equity:      {result.final_equity:,.2f}")
    print(f"  Total return:      {perf.total_return_pct:+.2f}%")
    print(f"  Sharpe ratio:      {perf.sharpe_ratio:.3f}")
    print(f"  Max drawdown:      {perf.max_drawdown_pct:.2f}%")
    print(f"  Trades:            {perf.total_trades} ({perf.winning_trades} won, {perf.losing_trades} lost)")
    print(f"  Win rate:          {perf.win_rate:.1f}%")
    print(f"  Average win:       {perf.average_win:,.2f}")
    print(f"  Average loss:      {perf.average_loss:,.2f}")
    print(f"  Profit factor:     {perf.profit_factor:.2f}")
    print()
