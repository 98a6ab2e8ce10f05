# reel_engine/domain/session/entities/game_session.py
import logging
from enum import Enum
from typing import Dict, List, Any, Optional

from reel_engine.domain.animation.entities.circular_buffer import VISIBLE_WINDOW
from reel_engine.domain.animation.entities.spin_animation import SpinAnimation
from reel_engine.domain.animation.services.reel_aligner import ReelAligner
from reel_engine.domain.errors import ConfigurationError
from reel_engine.domain.events.event_dispatcher import EventDispatcher
from reel_engine.domain.events.session_events import SessionEventType, SessionEvent
from reel_engine.domain.machine.entities.grid import Grid, columns_to_grid, grid_names, grid_to_columns
from reel_engine.domain.machine.services.payout import total_payout, update_pool
from reel_engine.domain.machine.services.win_evaluation import WinEvaluator, WinningLine
from .spin_result import SpinResult


class SpinMode(Enum):
    SIMPLE = "simple"      # independent draw per cell, no animation
    ANIMATED = "animated"  # per-reel columns reconciled with circular buffers


class GameSession:
    """
    Holds the pool, bet and last outcome of one player at one machine, and
    drives spins through the machine, the win evaluator and (in animated
    mode) the reel animation.
    """
    def __init__(self, session_id: str, machine, config: Optional[Dict[str, Any]] = None,
                 mode: SpinMode = SpinMode.SIMPLE, animation: Optional[SpinAnimation] = None,
                 event_dispatcher: Optional[EventDispatcher] = None):
        """
        Initialize a game session.

        Args:
            session_id: Unique identifier for this session
            machine: SlotMachine entity instance
            config: The 'session' section of the game configuration
            mode: Drawing mode; decides whether column wins are evaluated
            animation: SpinAnimation to drive in animated mode (built if omitted)
            event_dispatcher: Optional event dispatcher for session events

        Raises:
            ConfigurationError: On an unusable session or animation setup
        """
        config = config or {}
        self.id = session_id
        self.machine = machine
        self.mode = SpinMode(mode)
        self.event_dispatcher = event_dispatcher
        self.logger = logging.getLogger(f"domain.session.{session_id}")

        self.min_bet = float(config.get("min_bet", 1.0))
        self.bet_step = float(config.get("bet_step", 1.0))
        self.big_win_multiple = float(config.get("big_win_multiple", 10.0))
        self.pool = float(config.get("initial_pool", 100.0))
        if self.pool < 0:
            raise ConfigurationError(f"initial_pool must be >= 0, got {self.pool}")
        self.current_bet = self._clamp_bet(float(config.get("initial_bet", 5.0)))

        self.last_grid: Optional[Grid] = None
        self.last_wins: List[WinningLine] = []
        self.last_win_amount = 0.0
        self.has_recent_win = False
        self.is_spinning = False
        self.spin_count = 0

        self._pending_grid: Optional[Grid] = None
        self._pending_bet = 0.0
        self._balance_before = 0.0

        # Columns only line up by chance when every cell is drawn independently
        self.evaluator = WinEvaluator(include_columns=self.mode == SpinMode.SIMPLE)

        self.animation = None
        if self.mode == SpinMode.ANIMATED:
            if machine.rows != VISIBLE_WINDOW:
                raise ConfigurationError(
                    f"Animated mode shows {VISIBLE_WINDOW} rows per reel, machine has {machine.rows}"
                )
            self.animation = animation or SpinAnimation(
                machine.catalog.symbols, len(machine.reels), aligner=ReelAligner(machine.rng)
            )

        self.logger.info(
            f"Session started on machine {machine.id} in {self.mode.value} mode, "
            f"pool {self.pool:.2f}, bet {self.current_bet:.2f}"
        )

    # Bet controls

    def _clamp_bet(self, amount: float) -> float:
        return min(max(amount, self.min_bet), max(self.pool, self.min_bet))

    def set_bet(self, amount: float) -> float:
        """
        Clamp ``amount`` to [min_bet, pool] and make it the current bet.
        Ignored while a spin is in progress.

        Returns:
            The current bet after the change
        """
        if self.is_spinning:
            self.logger.debug("Bet change ignored while spinning")
            return self.current_bet

        new_bet = self._clamp_bet(amount)
        if new_bet != self.current_bet:
            self.logger.debug(f"Bet updated: {self.current_bet:.2f} -> {new_bet:.2f}")
            self.current_bet = new_bet
            self._dispatch(SessionEventType.BET_CHANGED, {"bet": new_bet})
        return self.current_bet

    def increase_bet(self) -> float:
        return self.set_bet(self.current_bet + self.bet_step)

    def decrease_bet(self) -> float:
        return self.set_bet(self.current_bet - self.bet_step)

    # Spin lifecycle

    def can_spin(self) -> bool:
        return not self.is_spinning and self.pool >= self.current_bet

    def start_spin(self) -> bool:
        """
        Debit the bet and commit the outcome of a new spin.

        In simple mode the grid is drawn cell by cell; in animated mode one
        column per reel is drawn and the reel animation starts toward it.

        Returns:
            False (and nothing changes) if a spin is running or the pool
            cannot cover the bet, True otherwise
        """
        if self.is_spinning:
            self.logger.debug("Spin request ignored, a spin is already running")
            return False
        if self.pool < self.current_bet:
            self.logger.warning(f"Insufficient balance: {self.pool:.2f} < {self.current_bet:.2f}")
            return False

        self._balance_before = self.pool
        self._pending_bet = self.current_bet
        self.pool -= self.current_bet
        self.is_spinning = True

        if self.mode == SpinMode.ANIMATED:
            columns = self.machine.spin_columns()
            self._pending_grid = columns_to_grid(columns)
            self.animation.start(columns)
        else:
            self._pending_grid = self.machine.spin_grid()

        self.logger.debug(
            f"Spinning! Bet: {self._pending_bet:.2f}, pool {self._balance_before:.2f} -> {self.pool:.2f}"
        )
        self._dispatch(SessionEventType.SPIN_STARTED, {
            "bet": self._pending_bet,
            "pool": self.pool,
        })
        return True

    def tick(self, elapsed: float) -> Optional[SpinResult]:
        """
        Advance the reel animation. Completes the spin once the last reel stops.

        Args:
            elapsed: Seconds since the previous tick

        Returns:
            The SpinResult when this tick finished the spin, otherwise None
        """
        if not self.is_spinning or self.animation is None:
            return None

        for index in self.animation.tick(elapsed):
            self._dispatch(SessionEventType.REEL_STOPPED, {
                "reel": index,
                "symbols": [s.name for s in self.animation.reels[index].visible_symbols()],
            })

        if not self.animation.is_animating:
            return self.complete_spin()
        return None

    def complete_spin(self) -> Optional[SpinResult]:
        """
        Evaluate the committed grid and credit the payout.

        Returns:
            SpinResult of the spin, or None if no spin was in progress
        """
        if not self.is_spinning or self._pending_grid is None:
            self.logger.warning("Attempted to complete a spin that was never started")
            return None

        if self.animation is not None:
            if self.animation.is_animating:
                self.logger.warning("Completing spin before the reels stopped")
                self.animation.cancel()
            elif (grid_names(self.animation.visible_columns())
                  != grid_names(grid_to_columns(self._pending_grid))):
                self.logger.error("Reels stopped on a window that differs from the committed grid")

        grid, bet = self._pending_grid, self._pending_bet
        wins = self.evaluator.find_wins(grid)
        payout = total_payout(wins, bet)
        self.pool = update_pool(self.pool, wins, bet)

        self.last_grid = grid
        self.last_wins = wins
        self.has_recent_win = bool(wins)
        if wins:
            self.last_win_amount = payout
        self.spin_count += 1
        self.is_spinning = False
        self._pending_grid = None

        result = SpinResult(
            session_id=self.id,
            spin_number=self.spin_count,
            mode=self.mode.value,
            bet=bet,
            payout=payout,
            balance_before=self._balance_before,
            balance_after=self.pool,
            grid=grid_names(grid),
            winning_lines=[line.to_dict() for line in wins],
            big_win=payout >= self.big_win_multiple * bet,
        )

        if wins:
            self.logger.debug(f"WIN! {len(wins)} lines, payout {payout:.2f}, pool {self.pool:.2f}")
        else:
            self.logger.debug(f"No wins this time. Pool remains: {self.pool:.2f}")

        self._dispatch(SessionEventType.SPIN_COMPLETED, result.to_dict())
        if result.big_win:
            self._dispatch(SessionEventType.BIG_WIN, {"payout": payout, "bet": bet})

        self._settle_bet()
        return result

    def cancel_spin(self) -> bool:
        """
        Stop the running spin without crediting any payout. The debited bet
        is not returned.

        Returns:
            True if a spin was cancelled
        """
        if not self.is_spinning:
            return False

        if self.animation is not None:
            self.animation.cancel()
        self.is_spinning = False
        self._pending_grid = None
        self.logger.info(f"Spin cancelled, bet {self._pending_bet:.2f} forfeited")
        self._dispatch(SessionEventType.SPIN_CANCELLED, {"bet": self._pending_bet, "pool": self.pool})
        self._settle_bet()
        return True

    def spin(self) -> Optional[SpinResult]:
        """Start and fully resolve one simple-mode spin."""
        if self.mode != SpinMode.SIMPLE:
            raise ValueError("spin() resolves simple-mode spins only; drive animated spins with tick()")
        if not self.start_spin():
            return None
        return self.complete_spin()

    def _settle_bet(self):
        if self.pool < self.min_bet:
            self.logger.info(f"Balance depleted: {self.pool:.2f}")
            self._dispatch(SessionEventType.BALANCE_DEPLETED, {"pool": self.pool})
        elif self.current_bet > self.pool:
            self.current_bet = self._clamp_bet(self.current_bet)
            self.logger.debug(f"Bet lowered to pool: {self.current_bet:.2f}")

    def _dispatch(self, event_type: SessionEventType, data: Dict[str, Any]):
        if self.event_dispatcher:
            self.event_dispatcher.dispatch(SessionEvent(
                type=event_type,
                session_id=self.id,
                machine_id=self.machine.id,
                data=dict(data),
            ))

    def get_state(self) -> Dict[str, Any]:
        return {
            "session_id": self.id,
            "mode": self.mode.value,
            "pool": self.pool,
            "current_bet": self.current_bet,
            "is_spinning": self.is_spinning,
            "spin_count": self.spin_count,
            "last_win_amount": self.last_win_amount,
            "has_recent_win": self.has_recent_win,
            "last_grid": grid_names(self.last_grid) if self.last_grid else None,
        }
