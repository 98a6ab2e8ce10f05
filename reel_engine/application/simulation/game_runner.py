# reel_engine/application/simulation/game_runner.py
import logging
from collections import Counter
from typing import Dict, List, Any, Optional

from reel_engine.domain.session.entities.game_session import GameSession, SpinMode
from reel_engine.domain.session.entities.spin_result import SpinResult


class GameRunner:
    """
    Plays a game session headlessly for a number of spins, driving the reel
    animation with a fixed frame time in animated mode.
    """
    def __init__(self, session: GameSession, config: Optional[Dict[str, Any]] = None):
        """
        Args:
            session: GameSession to play
            config: Optional runner settings: frame_time (seconds per tick),
                max_ticks_per_spin, keep_results
        """
        self.logger = logging.getLogger(f"application.simulation.runner.{session.id}")
        self.session = session
        self.config = config or {}
        self.frame_time = float(self.config.get("frame_time", 0.016))
        self.max_ticks_per_spin = int(self.config.get("max_ticks_per_spin", 10000))
        self.keep_results = bool(self.config.get("keep_results", False))
        self.results: List[SpinResult] = []

    def play_spin(self) -> Optional[SpinResult]:
        """
        Play one spin to completion.

        Returns:
            The SpinResult, or None if the spin could not start or the reels
            never stopped within max_ticks_per_spin
        """
        if self.session.mode == SpinMode.SIMPLE:
            return self.session.spin()

        if not self.session.start_spin():
            return None

        for _ in range(self.max_ticks_per_spin):
            result = self.session.tick(self.frame_time)
            if result is not None:
                return result

        self.logger.error(f"Reels did not stop within {self.max_ticks_per_spin} ticks, cancelling spin")
        self.session.cancel_spin()
        return None

    def run(self, num_spins: int) -> Dict[str, Any]:
        """
        Play up to ``num_spins`` spins, stopping early when the pool can no
        longer cover the bet.

        Returns:
            Summary dictionary of the run
        """
        self.logger.info(f"Starting run of {num_spins} spins in {self.session.mode.value} mode")

        start_pool = self.session.pool
        peak_pool = start_pool
        total_bet = 0.0
        total_payout = 0.0
        winning_spins = 0
        big_wins = 0
        line_counts = Counter()
        symbol_counts = Counter()
        spins_played = 0
        stop_reason = "completed"

        for _ in range(num_spins):
            if not self.session.can_spin():
                stop_reason = "insufficient_balance"
                break

            result = self.play_spin()
            if result is None:
                stop_reason = "spin_failed"
                break

            spins_played += 1
            total_bet += result.bet
            total_payout += result.payout
            peak_pool = max(peak_pool, result.balance_after)
            if result.is_win:
                winning_spins += 1
            if result.big_win:
                big_wins += 1
            for line in result.winning_lines:
                line_counts[line["kind"]] += 1
                symbol_counts[line["symbol"]] += 1
            if self.keep_results:
                self.results.append(result)

        summary = {
            "session_id": self.session.id,
            "mode": self.session.mode.value,
            "spins": spins_played,
            "stop_reason": stop_reason,
            "start_pool": start_pool,
            "final_pool": self.session.pool,
            "peak_pool": peak_pool,
            "total_bet": total_bet,
            "total_payout": total_payout,
            "rtp": total_payout / total_bet if total_bet > 0 else 0.0,
            "hit_rate": winning_spins / spins_played if spins_played else 0.0,
            "big_wins": big_wins,
            "wins_by_line_kind": dict(line_counts),
            "wins_by_symbol": dict(symbol_counts),
        }

        self.logger.info(
            f"Run finished ({stop_reason}) - Spins: {spins_played}, bet: {total_bet:.2f}, "
            f"payout: {total_payout:.2f}, RTP: {summary['rtp']:.3f}, final pool: {self.session.pool:.2f}"
        )
        return summary
