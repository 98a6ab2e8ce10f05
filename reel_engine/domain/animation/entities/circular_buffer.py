# reel_engine/domain/animation/entities/circular_buffer.py
from typing import List, Sequence

from reel_engine.domain.errors import ConfigurationError
from reel_engine.domain.machine.entities.symbol import Symbol

VISIBLE_WINDOW = 3


class CircularSymbolBuffer:
    """
    The long circular symbol sequence behind one animated reel.

    ``current_offset`` is a distance along the buffer in the same unit as
    ``symbol_height``; the visible window starts at symbol
    ``int(current_offset / symbol_height) % length`` and wraps around.
    """
    def __init__(self, symbols: Sequence[Symbol], symbol_height: float = 100.0, buffer_id: str = ""):
        """
        Initialize a circular buffer.

        Args:
            symbols: Buffer contents in scroll order
            symbol_height: Height of one symbol, in offset units
            buffer_id: Optional identifier for the buffer

        Raises:
            ConfigurationError: If the buffer is shorter than the visible
                window or symbol_height is not positive
        """
        if len(symbols) < VISIBLE_WINDOW:
            raise ConfigurationError(
                f"Circular buffer '{buffer_id}' needs at least {VISIBLE_WINDOW} symbols, got {len(symbols)}"
            )
        if symbol_height <= 0:
            raise ConfigurationError(f"symbol_height must be positive, got {symbol_height}")

        self.id = buffer_id
        self.symbols: List[Symbol] = list(symbols)
        self.symbol_height = float(symbol_height)
        self.current_offset = 0.0
        self.target_offset = 0.0

    @property
    def length(self) -> int:
        return len(self.symbols)

    @property
    def max_offset(self) -> float:
        """Offset at which the buffer wraps back to 0."""
        return self.length * self.symbol_height

    def position_of(self, offset: float) -> int:
        return int(offset / self.symbol_height) % self.length

    def get_symbols_at_position(self, position: int, window_size: int = VISIBLE_WINDOW) -> List[Symbol]:
        """
        Get the symbols visible in the window at the given position.
        Handles wrapping around the buffer.

        Args:
            position: Starting symbol index
            window_size: Number of symbols to return (default: 3)

        Returns:
            List of visible symbols
        """
        if self.length == 0:
            return []
        return [self.symbols[(position + i) % self.length] for i in range(window_size)]

    def visible_window(self, count: int = VISIBLE_WINDOW) -> List[Symbol]:
        return self.get_symbols_at_position(self.position_of(self.current_offset), count)

    def advance(self, distance: float):
        """Scroll forward by ``distance``, wrapping at max_offset."""
        self.current_offset = (self.current_offset + distance) % self.max_offset

    def distance_to_target(self) -> float:
        """Forward (wrap-aware) distance from current_offset to target_offset."""
        if self.target_offset > self.current_offset:
            return self.target_offset - self.current_offset
        return (self.max_offset - self.current_offset) + self.target_offset

    def overwrite(self, position: int, symbols: Sequence[Symbol]):
        """Overwrite consecutive entries starting at ``position`` in place."""
        for i, symbol in enumerate(symbols):
            if position + i < self.length:
                self.symbols[position + i] = symbol

    def __len__(self) -> int:
        return self.length

    def __repr__(self) -> str:
        return f"CircularSymbolBuffer(id={self.id}, length={self.length}, offset={self.current_offset})"


def visible_window(buffer: CircularSymbolBuffer, offset: float, count: int = VISIBLE_WINDOW) -> List[Symbol]:
    """Pure read of ``count`` symbols shown when ``buffer`` rests at ``offset``."""
    if buffer.length == 0:
        return []
    return buffer.get_symbols_at_position(buffer.position_of(offset), count)


def generate_circular_reel(base_symbols: Sequence[Symbol], reel_length: int) -> List[Symbol]:
    """Cycle ``base_symbols`` until the sequence is ``reel_length`` long."""
    if not base_symbols:
        raise ConfigurationError("Cannot build a circular reel from no symbols")
    return [base_symbols[i % len(base_symbols)] for i in range(reel_length)]
