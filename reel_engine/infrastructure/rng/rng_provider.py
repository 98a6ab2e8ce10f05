# reel_engine/infrastructure/rng/rng_provider.py
import logging
from typing import Optional, Dict, Any

from .strategies.mersenne_rng import MersenneTwisterRNG
from .strategies.numpy_rng import NumpyRNG
from .strategies.rng_strategy import RNGStrategy


STRATEGIES = {
    "mersenne": (MersenneTwisterRNG, "Mersenne Twister (Python's default random generator)"),
    "numpy": (NumpyRNG, "NumPy RandomState generator"),
}


class RNGProvider:
    """
    Builds the random sources behind reel draws and aligner splices.
    Every call returns a fresh strategy, so two machines never share a stream.
    """
    def __init__(self):
        self.logger = logging.getLogger("infrastructure.rng.provider")

    def get_rng(self, strategy_name: str, seed: Optional[int] = None) -> RNGStrategy:
        """
        Create an RNG strategy by name.

        Args:
            strategy_name: "mersenne" or "numpy" (case-insensitive)
            seed: Optional seed for a reproducible sequence

        Raises:
            ValueError: If the strategy name is unknown
        """
        key = strategy_name.lower()
        if key not in STRATEGIES:
            self.logger.error(f"Unknown RNG strategy: {strategy_name}")
            raise ValueError(f"Unknown RNG strategy: {strategy_name}")

        strategy_cls = STRATEGIES[key][0]
        self.logger.debug(f"Creating {strategy_cls.__name__} with seed: {seed}")
        return strategy_cls(seed)

    def create_from_config(self, config: Dict[str, Any]) -> RNGStrategy:
        """
        Create an RNG strategy from the 'rng' section of a game configuration,
        e.g. {"strategy": "numpy", "seed": 12345}.
        """
        return self.get_rng(config.get("strategy", "mersenne"), config.get("seed"))

    @staticmethod
    def get_available_strategies() -> Dict[str, str]:
        return {name: description for name, (_, description) in STRATEGIES.items()}
