# reel_engine/domain/machine/entities/reel.py
import logging
from typing import List, Optional

from reel_engine.domain.errors import ConfigurationError
from .symbol import Symbol


class Reel:
    """
    A weighted random source producing one symbol per draw.
    Owns its draw pool and the weight distribution derived from it.
    """
    def __init__(self, symbols: List[Symbol], reel_id: str = "", rng_strategy=None):
        """
        Initialize a reel with its draw pool.

        Args:
            symbols: Draw pool; names may repeat with differing weights
            reel_id: Optional identifier for the reel
            rng_strategy: Random number generator strategy (optional, settable later)

        Raises:
            ConfigurationError: If the pool is empty, a weight is negative or
                no weight is positive
        """
        self.id = reel_id
        self.logger = logging.getLogger(f"domain.machine.reel.{reel_id or 'anonymous'}")
        self.rng = rng_strategy

        if not symbols:
            self.logger.error("Reel created with an empty symbol pool")
            raise ConfigurationError(f"Reel '{reel_id}' has an empty symbol pool")

        weights = [float(s.weight) for s in symbols]
        if any(w < 0 for w in weights):
            raise ConfigurationError(f"Reel '{reel_id}' has negative weights: {weights}")
        if sum(weights) <= 0:
            raise ConfigurationError(f"Reel '{reel_id}' has no positive weight: {weights}")

        self.symbols = tuple(symbols)
        self.weights = tuple(weights)
        self.total_weight = sum(weights)
        self.length = len(self.symbols)

    def set_rng(self, rng_strategy):
        self.rng = rng_strategy

    def probability(self, name: str) -> float:
        """Probability that a draw returns a symbol with the given name."""
        return sum(w for s, w in zip(self.symbols, self.weights) if s.name == name) / self.total_weight

    def draw(self) -> Symbol:
        """
        Draw one symbol with probability weight / total_weight.

        Returns:
            The drawn symbol

        Raises:
            ValueError: If no RNG strategy is set
        """
        self._require_rng()
        return self.symbols[self.rng.weighted_index(self.weights)]

    def draw_distinct(self, count: int) -> List[Symbol]:
        """
        Draw ``count`` symbols without repeating a name, each pick weighted
        among the names not drawn yet.

        Args:
            count: Number of symbols to draw

        Returns:
            List of drawn symbols, in draw order

        Raises:
            ConfigurationError: If the pool cannot supply ``count`` distinct
                names with positive weight
        """
        self._require_rng()

        candidates = [(s, w) for s, w in zip(self.symbols, self.weights) if w > 0]
        if len({s.name for s, _ in candidates}) < count:
            raise ConfigurationError(
                f"Reel '{self.id}' cannot draw {count} distinct symbols from "
                f"{len({s.name for s, _ in candidates})} names"
            )

        drawn = []
        for _ in range(count):
            index = self.rng.weighted_index([w for _, w in candidates])
            symbol = candidates[index][0]
            drawn.append(symbol)
            candidates = [(s, w) for s, w in candidates if s.name != symbol.name]
        return drawn

    def _require_rng(self):
        if self.rng is None:
            self.logger.error("No RNG strategy set, cannot draw")
            raise ValueError(f"No RNG strategy set for reel '{self.id}'")

    def __len__(self) -> int:
        return self.length

    def __repr__(self) -> str:
        return f"Reel(id={self.id}, length={self.length})"


def draw_reel(reel: Reel) -> Symbol:
    return reel.draw()
