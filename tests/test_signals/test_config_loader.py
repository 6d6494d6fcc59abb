"""
Tests for the YAML run-configuration loader.
"""
from pathlib import Path

import pytest

from backtester.evaluation.portfolio_types import PerformanceMetric
from backtester.shared.defaults import INITIAL_CAPITAL, MAX_ITERATIONS, SMA_SLOW_PERIOD
from backtester.signals.config import ConfigurationError
from backtester.signals.config_loader import load_config_from_yaml


CONFIG_DIR = Path(__file__).resolve().parents[2] / "configs"


def _write(tmp_path, text):
    path = tmp_path / "run.yaml"
    path.write_text(text)
    return path


class TestLoadConfig:
    """Test loading run configs from YAML."""

    def test_full_config(self, tmp_path):
        path = _write(tmp_path, """
strategy:
  name: RSI Strategy
  parameters:
    period: 10
    oversold_level: 25
    overbought_level: 75
backtest:
  initial_capital: 5000
optimization:
  metric: total_return
  max_iterations: 50
  workers: 2
""")
        config = load_config_from_yaml(path)

        assert config.strategy.name == "RSI Strategy"
        assert config.strategy.parameters == {"period": 10, "oversold_level": 25.0, "overbought_level": 75.0}
        assert config.initial_capital == 5000.0
        assert config.metric is PerformanceMetric.TOTAL_RETURN
        assert config.max_iterations == 50
        assert config.workers == 2

    def test_defaults_fill_missing_fields(self, tmp_path):
        path = _write(tmp_path, """
strategy:
  name: SMA Crossover
  parameters:
    fast_period: 8
""")
        config = load_config_from_yaml(path)

        assert config.strategy.parameters == {"fast_period": 8, "slow_period": SMA_SLOW_PERIOD}
        assert config.initial_capital == INITIAL_CAPITAL
        assert config.metric is PerformanceMetric.SHARPE_RATIO
        assert config.max_iterations == MAX_ITERATIONS
        assert config.workers == 1

    def test_camel_case_metric(self, tmp_path):
        path = _write(tmp_path, "strategy:\n  name: Momentum Strategy\noptimization:\n  metric: winRate\n")

        assert load_config_from_yaml(path).metric is PerformanceMetric.WIN_RATE

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config_from_yaml(tmp_path / "missing.yaml")

    def test_empty_file(self, tmp_path):
        with pytest.raises(ValueError, match="Empty config"):
            load_config_from_yaml(_write(tmp_path, ""))

    def test_missing_strategy_name(self, tmp_path):
        with pytest.raises(ValueError, match="strategy.name"):
            load_config_from_yaml(_write(tmp_path, "backtest:\n  initial_capital: 100\n"))

    @pytest.mark.parametrize("text,message", [
        ("strategy:\n  name: Unknown\n", "not found"),
        ("strategy:\n  name: SMA Crossover\n  parameters:\n    fast_period: 500\n", "must be in"),
        ("strategy:\n  name: SMA Crossover\noptimization:\n  metric: sortino\n", "Unknown metric"),
        ("strategy:\n  name: SMA Crossover\noptimization:\n  max_iterations: 0\n", "max_iterations"),
        ("strategy:\n  name: SMA Crossover\noptimization:\n  max_iterations: 5.5\n", "whole number"),
        ("strategy:\n  name: SMA Crossover\nbacktest:\n  initial_capital: -1\n", "initial_capital"),
    ])
    def test_invalid_settings(self, tmp_path, text, message):
        with pytest.raises(ConfigurationError, match=message):
            load_config_from_yaml(_write(tmp_path, text))

    def test_shipped_configs_load(self):
        for name in ["sma_crossover", "rsi_strategy", "momentum_strategy"]:
            config = load_config_from_yaml(CONFIG_DIR / f"{name}.yaml")
            assert config.strategy.parameters
