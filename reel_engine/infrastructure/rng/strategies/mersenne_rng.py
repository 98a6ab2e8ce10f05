# reel_engine/infrastructure/rng/strategies/mersenne_rng.py
import random
from typing import Optional, Sequence


class MersenneTwisterRNG:
    """
    Random number generator using the Mersenne Twister algorithm (Python's default).
    """
    def __init__(self, seed_value: Optional[int] = None):
        """
        Initialize the RNG with an optional seed.

        Args:
            seed_value: Optional seed value for reproducible random numbers
        """
        # Dedicated instance, the module-level generator stays untouched
        self._random = random.Random()

        if seed_value is not None:
            self.seed(seed_value)

    def get_random_int(self, min_val: int, max_val: int) -> int:
        return self._random.randint(min_val, max_val)

    def get_random_float(self, min_val: float, max_val: float) -> float:
        return self._random.uniform(min_val, max_val)

    def weighted_index(self, weights: Sequence[float]) -> int:
        """
        Pick an index proportionally to its weight.

        Raises:
            ValueError: If weights is empty or sums to zero
        """
        if not weights or sum(weights) <= 0:
            raise ValueError(f"Cannot sample from weights: {list(weights)}")
        return self._random.choices(range(len(weights)), weights=weights, k=1)[0]

    def seed(self, seed_value: int) -> None:
        self._random.seed(seed_value)
