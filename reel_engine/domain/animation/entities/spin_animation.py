# reel_engine/domain/animation/entities/spin_animation.py
import logging
from enum import Enum, auto
from typing import Any, Dict, List, Optional, Sequence

from reel_engine.domain.machine.entities.symbol import Symbol
from ..services.reel_aligner import ReelAligner
from .circular_buffer import CircularSymbolBuffer, VISIBLE_WINDOW, generate_circular_reel


class ReelState(Enum):
    IDLE = auto()
    SCROLLING = auto()
    ALIGNING = auto()
    STOPPED = auto()


DEFAULT_ANIMATION_CONFIG = {
    "reel_length": 50,
    "symbol_height": 100.0,
    "base_speed": 500.0,
    "speed_step": 50.0,
    "target_symbols": 3,
    "target_step": 10.0,
    "decel_distance": 100.0,
    "decel_factor": 0.8,
    "min_speed": 100.0,
    "stop_distance": 15.0,
    "stop_speed": 120.0,
}


class AnimatedReel:
    """One scrolling column: its circular buffer plus its animation state."""

    def __init__(self, index: int, buffer: CircularSymbolBuffer):
        self.index = index
        self.buffer = buffer
        self.state = ReelState.IDLE
        self.spin_speed = 0.0
        self.target: List[Symbol] = []

    @property
    def is_spinning(self) -> bool:
        return self.state == ReelState.SCROLLING

    def visible_symbols(self, count: int = VISIBLE_WINDOW) -> List[Symbol]:
        return self.buffer.visible_window(count)

    def __repr__(self) -> str:
        return f"AnimatedReel(index={self.index}, state={self.state.name}, speed={self.spin_speed:.1f})"


class SpinAnimation:
    """
    Caller-driven animation of the reels for one spin.

    Each tick advances only the current reel. When it is close enough to its
    target offset, slow enough, or about to step past the target, it aligns
    once on its target column and stops, and the next reel starts scrolling.
    Reels stop strictly in order.
    """
    def __init__(self, base_symbols: Sequence[Symbol], num_reels: int,
                 config: Optional[Dict[str, Any]] = None, aligner: Optional[ReelAligner] = None):
        """
        Args:
            base_symbols: Symbols cycled to build every circular buffer
            num_reels: Number of animated reels
            config: Overrides for DEFAULT_ANIMATION_CONFIG
            aligner: Aligner used at stop time (default: ReelAligner on an unseeded MersenneTwisterRNG)
        """
        self.logger = logging.getLogger("domain.animation.spin")
        self.config = dict(DEFAULT_ANIMATION_CONFIG)
        self.config.update(config or {})

        self.base_symbols = list(base_symbols)
        self.aligner = aligner or ReelAligner()
        self.reels = [AnimatedReel(i, self._build_buffer(i)) for i in range(num_reels)]

        self.is_animating = False
        self.current_reel: Optional[int] = None

    def _build_buffer(self, index: int) -> CircularSymbolBuffer:
        symbols = generate_circular_reel(self.base_symbols, int(self.config["reel_length"]))
        return CircularSymbolBuffer(symbols, float(self.config["symbol_height"]), f"column{index}")

    def start(self, target_columns: Sequence[Sequence[Symbol]]) -> bool:
        """
        Begin a new animation toward ``target_columns`` (one per reel).
        Buffers are regenerated so splices from earlier spins never accumulate.

        Returns:
            False if an animation is already running, True otherwise
        """
        if self.is_animating:
            self.logger.warning("Attempted to start an animation while one is running")
            return False
        if len(target_columns) != len(self.reels):
            raise ValueError(f"Expected {len(self.reels)} target columns, got {len(target_columns)}")

        height = float(self.config["symbol_height"])
        for reel, target in zip(self.reels, target_columns):
            reel.buffer = self._build_buffer(reel.index)
            reel.buffer.current_offset = 0.0
            reel.buffer.target_offset = (height * self.config["target_symbols"]
                                         + reel.index * self.config["target_step"])
            reel.spin_speed = self.config["base_speed"] + reel.index * self.config["speed_step"]
            reel.target = list(target)
            reel.state = ReelState.IDLE

        self.is_animating = True
        self.current_reel = 0
        self.reels[0].state = ReelState.SCROLLING
        self.logger.debug(f"Animation started for {len(self.reels)} reels")
        return True

    def tick(self, elapsed: float) -> List[int]:
        """
        Advance the animation by ``elapsed`` seconds.

        Returns:
            Indices of the reels that stopped during this tick
        """
        if not self.is_animating or self.current_reel is None:
            return []

        reel = self.reels[self.current_reel]
        buffer = reel.buffer

        remaining = buffer.distance_to_target()
        step = reel.spin_speed * elapsed
        # A step that would carry the reel past its target stops it on the target
        should_stop = (remaining < self.config["stop_distance"]
                       or reel.spin_speed < self.config["stop_speed"]
                       or step >= remaining)

        if not should_stop:
            buffer.advance(step)
            if (buffer.distance_to_target() < self.config["decel_distance"]
                    and reel.spin_speed > self.config["min_speed"]):
                reel.spin_speed = max(reel.spin_speed * self.config["decel_factor"],
                                      self.config["min_speed"])
            return []

        self._stop_reel(reel)
        return [reel.index]

    def _stop_reel(self, reel: AnimatedReel):
        reel.buffer.current_offset = reel.buffer.target_offset
        reel.spin_speed = 0.0
        reel.state = ReelState.ALIGNING
        self.aligner.align(reel.buffer, reel.target)
        reel.state = ReelState.STOPPED

        shown = [s.name for s in reel.visible_symbols()]
        expected = [s.name for s in reel.target[:VISIBLE_WINDOW]]
        self.logger.debug(f"Reel {reel.index} stopped, expected {expected}, showing {shown}")

        if reel.index + 1 < len(self.reels):
            self.current_reel = reel.index + 1
            self.reels[self.current_reel].state = ReelState.SCROLLING
        else:
            self.current_reel = None
            self.is_animating = False
            self.logger.debug("All reels stopped")

    def cancel(self):
        """Halt ticking and discard any in-flight alignment."""
        for reel in self.reels:
            reel.state = ReelState.IDLE
            reel.spin_speed = 0.0
            reel.target = []
        self.is_animating = False
        self.current_reel = None

    def visible_columns(self) -> List[List[Symbol]]:
        return [reel.visible_symbols() for reel in self.reels]

    @property
    def states(self) -> List[ReelState]:
        return [reel.state for reel in self.reels]
