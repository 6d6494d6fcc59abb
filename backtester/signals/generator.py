"""
Signal generator: validates a StrategyConfig and runs the matching strategy.
"""
import logging
from typing import List

from .config import StrategyConfig
from .registry import StrategyRegistry
from ..shared.types import TradingSignal

logger = logging.getLogger(__name__)


class SignalGenerator:
    """
    Turns (data, StrategyConfig) into an ordered list of TradingSignals.

    Configuration is checked before any indicator is computed: an unknown
    strategy or an out-of-range parameter raises ConfigurationError.
    """

    def __init__(self, registry: StrategyRegistry):
        self.registry = registry

    def generate(self, data, config: StrategyConfig) -> List[TradingSignal]:
        """
        Generate signals for one strategy configuration.

        Args:
            data: OHLCV DataFrame (or close-price Series) with ascending unique dates
            config: Strategy name and parameters

        Returns:
            Signals in bar order, alternating BUY/SELL starting with BUY
        """
        definition = self.registry.get(config.name)
        parameters = definition.validate(config.parameters)
        signals = definition.generate(data, StrategyConfig(name=config.name, parameters=parameters))
        logger.debug("%s %s -> %d signals", config.name, parameters, len(signals))
        return signals
