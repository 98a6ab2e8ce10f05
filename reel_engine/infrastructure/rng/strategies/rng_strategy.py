# reel_engine/infrastructure/rng/strategies/rng_strategy.py
from typing import Protocol, Sequence


class RNGStrategy(Protocol):
    """Protocol defining the interface for random number generators."""

    def get_random_int(self, min_val: int, max_val: int) -> int:
        """
        Get a random integer in the range [min_val, max_val].

        Args:
            min_val: Minimum value (inclusive)
            max_val: Maximum value (inclusive)

        Returns:
            Random integer in the specified range
        """
        ...

    def get_random_float(self, min_val: float, max_val: float) -> float:
        """
        Get a random float in the range [min_val, max_val].

        Args:
            min_val: Minimum value (inclusive)
            max_val: Maximum value (inclusive)

        Returns:
            Random float in the specified range
        """
        ...

    def weighted_index(self, weights: Sequence[float]) -> int:
        """
        Pick an index with probability weights[i] / sum(weights).

        Args:
            weights: Non-negative weights, at least one positive

        Returns:
            Selected index
        """
        ...

    def seed(self, seed_value: int) -> None:
        """
        Set the seed for the RNG.

        Args:
            seed_value: Seed value to use
        """
        ...
