# reel_engine/domain/animation/services/reel_aligner.py
import logging
from typing import Optional, Sequence, Tuple

from reel_engine.domain.errors import InvariantViolation
from reel_engine.domain.machine.entities.symbol import Symbol
from reel_engine.infrastructure.rng.strategies.mersenne_rng import MersenneTwisterRNG
from ..entities.circular_buffer import CircularSymbolBuffer, VISIBLE_WINDOW


class ReelAligner:
    """
    Positions a circular buffer so that its visible window shows a
    pre-determined target column.

    The existing buffer is searched first so the stop lands on a window that
    was already scrolling past. When no start position reproduces the target,
    the target is spliced into the buffer at a random position.
    """

    def __init__(self, rng_strategy=None):
        """
        Args:
            rng_strategy: RNG strategy used to pick splice positions
                (default: unseeded MersenneTwisterRNG)
        """
        self.rng = rng_strategy if rng_strategy is not None else MersenneTwisterRNG()
        self.splice_count = 0
        self.logger = logging.getLogger("domain.animation.aligner")

    @staticmethod
    def match_count(buffer: CircularSymbolBuffer, start: int, target: Sequence[Symbol]) -> int:
        """Number of leading target entries (at most 3) matched by name at ``start``."""
        return sum(
            1 for i in range(min(VISIBLE_WINDOW, len(target)))
            if buffer.symbols[(start + i) % buffer.length].matches(target[i])
        )

    def find_best_match(self, buffer: CircularSymbolBuffer, target: Sequence[Symbol]) -> Tuple[int, int]:
        """
        Scan every start position for the window that best reproduces ``target``.
        Ties keep the lowest position; the scan stops at the first perfect match.

        Returns:
            Tuple of (start_position, match_count)
        """
        needed = min(VISIBLE_WINDOW, len(target))
        best_position, best_count = 0, 0

        for start in range(buffer.length):
            count = self.match_count(buffer, start, target)
            if count > best_count:
                best_position, best_count = start, count
            if count == needed:
                break

        return best_position, best_count

    def align(self, buffer: CircularSymbolBuffer, target: Sequence[Symbol]) -> float:
        """
        Rest ``buffer`` on a window equal to ``target``, splicing if needed.

        Args:
            buffer: Buffer to reposition (and possibly rewrite)
            target: Target column, top..bottom; only the first 3 entries count

        Returns:
            The offset the buffer now rests at

        Raises:
            InvariantViolation: If the target is longer than the buffer
        """
        if buffer.length == 0 or not target:
            return buffer.current_offset

        if len(target) > buffer.length:
            error_msg = f"Target of {len(target)} symbols exceeds buffer length {buffer.length}"
            self.logger.error(error_msg)
            raise InvariantViolation(error_msg)

        needed = min(VISIBLE_WINDOW, len(target))
        position, count = self.find_best_match(buffer, target)

        if count < needed:
            position = self._splice_position(buffer)
            buffer.overwrite(position, list(target)[:needed])
            self.splice_count += 1
            self.logger.debug(
                f"No window of buffer {buffer.id} matched {[s.name for s in target[:needed]]} "
                f"(best {count}/{needed}), spliced at position {position}"
            )

        offset = position * buffer.symbol_height
        buffer.current_offset = offset
        buffer.target_offset = offset

        self.logger.debug(
            f"Buffer {buffer.id} aligned at offset {offset}, showing "
            f"{[s.name for s in buffer.visible_window(needed)]}"
        )
        return offset

    def _splice_position(self, buffer: CircularSymbolBuffer) -> int:
        # Position in [0, length - 3); a buffer of exactly 3 symbols splices at 0
        upper = buffer.length - VISIBLE_WINDOW - 1
        if upper < 0:
            return 0
        return self.rng.get_random_int(0, upper)


def align_reel_to(buffer: CircularSymbolBuffer, target: Sequence[Symbol], rng_strategy: Optional[object] = None) -> float:
    return ReelAligner(rng_strategy).align(buffer, target)
