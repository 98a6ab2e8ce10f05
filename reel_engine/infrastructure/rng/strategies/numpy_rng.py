# reel_engine/infrastructure/rng/strategies/numpy_rng.py
import numpy as np
from typing import Optional, Sequence


class NumpyRNG:
    """
    Random number generator using NumPy's implementation for better performance
    when drawing many symbols.
    """
    def __init__(self, seed_value: Optional[int] = None):
        """
        Initialize the RNG with an optional seed.

        Args:
            seed_value: Optional seed value for reproducible random numbers
        """
        # Dedicated RandomState, the global numpy state stays untouched
        self.rng = np.random.RandomState(seed_value)

    def get_random_int(self, min_val: int, max_val: int) -> int:
        # NumPy's randint is [min, max) so we add 1 to max_val
        return int(self.rng.randint(min_val, max_val + 1))

    def get_random_float(self, min_val: float, max_val: float) -> float:
        return float(self.rng.uniform(min_val, max_val))

    def weighted_index(self, weights: Sequence[float]) -> int:
        """
        Pick an index proportionally to its weight.

        Raises:
            ValueError: If weights is empty or sums to zero
        """
        p = np.asarray(weights, dtype=float)
        total = p.sum() if p.size else 0.0
        if total <= 0:
            raise ValueError(f"Cannot sample from weights: {list(weights)}")
        return int(self.rng.choice(p.size, p=p / total))

    def seed(self, seed_value: int) -> None:
        self.rng = np.random.RandomState(seed_value)
