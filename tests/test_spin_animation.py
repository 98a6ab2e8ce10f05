# tests/test_spin_animation.py
import unittest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from reel_engine.domain.animation.entities.spin_animation import ReelState, SpinAnimation
from reel_engine.domain.animation.services.reel_aligner import ReelAligner
from reel_engine.domain.machine.entities.symbol import default_catalog
from reel_engine.infrastructure.rng.strategies.mersenne_rng import MersenneTwisterRNG


FRAME = 0.016


def names(syms):
    return [s.name for s in syms]


class TestSpinAnimation(unittest.TestCase):

    def setUp(self):
        self.catalog = default_catalog()
        self.animation = SpinAnimation(
            self.catalog.symbols, 3, aligner=ReelAligner(MersenneTwisterRNG(11))
        )
        c = self.catalog
        self.targets = [
            [c["Seven"], c["Star"], c["Cherry"]],
            [c["Lemon"], c["Bell"], c["Star"]],
            [c["Bell"], c["Seven"], c["Lemon"]],
        ]

    def run_to_end(self, max_ticks=10000, elapsed=FRAME):
        stops = []
        for _ in range(max_ticks):
            stops.extend(self.animation.tick(elapsed))
            if not self.animation.is_animating:
                break
        return stops

    def test_start_sets_speeds_and_targets(self):
        self.assertTrue(self.animation.start(self.targets))

        reels = self.animation.reels
        self.assertEqual([r.spin_speed for r in reels], [500.0, 550.0, 600.0])
        self.assertEqual([r.buffer.target_offset for r in reels], [300.0, 310.0, 320.0])
        self.assertEqual([r.buffer.length for r in reels], [50, 50, 50])
        self.assertEqual(self.animation.states,
                         [ReelState.SCROLLING, ReelState.IDLE, ReelState.IDLE])

    def test_start_while_animating(self):
        self.animation.start(self.targets)
        self.assertFalse(self.animation.start(self.targets))

    def test_wrong_number_of_targets(self):
        with self.assertRaises(ValueError):
            self.animation.start(self.targets[:2])

    def test_reels_stop_in_order_on_their_targets(self):
        self.animation.start(self.targets)

        stops = self.run_to_end()

        self.assertEqual(stops, [0, 1, 2])
        self.assertFalse(self.animation.is_animating)
        self.assertEqual(self.animation.states, [ReelState.STOPPED] * 3)
        self.assertEqual(
            [names(column) for column in self.animation.visible_columns()],
            [names(target) for target in self.targets],
        )

    def test_long_ticks_stop_on_target_instead_of_overshooting(self):
        self.animation.start(self.targets)

        stops = self.run_to_end(max_ticks=10, elapsed=1.0)

        self.assertEqual(stops, [0, 1, 2])
        self.assertFalse(self.animation.is_animating)
        self.assertEqual(self.animation.states, [ReelState.STOPPED] * 3)
        self.assertEqual(
            [names(column) for column in self.animation.visible_columns()],
            [names(target) for target in self.targets],
        )

    def test_step_landing_past_target_stops_reel(self):
        self.animation.start(self.targets)

        # 500 per second for 0.7s overshoots the 300 target of reel 0
        self.assertEqual(self.animation.tick(0.7), [0])
        self.assertEqual(self.animation.states[:2], [ReelState.STOPPED, ReelState.SCROLLING])

    def test_only_one_reel_scrolls_at_a_time(self):
        self.animation.start(self.targets)
        for _ in range(10000):
            self.animation.tick(FRAME)
            scrolling = [s for s in self.animation.states if s == ReelState.SCROLLING]
            self.assertLessEqual(len(scrolling), 1)
            if not self.animation.is_animating:
                break

    def test_reel_decelerates_near_target(self):
        self.animation.start(self.targets)
        reel = self.animation.reels[0]
        speeds = []
        while reel.state == ReelState.SCROLLING:
            speeds.append(reel.spin_speed)
            self.animation.tick(FRAME)

        self.assertEqual(speeds[0], 500.0)
        self.assertLess(speeds[-1], 500.0)
        self.assertGreaterEqual(min(speeds), 100.0)
        self.assertEqual(speeds, sorted(speeds, reverse=True))

    def test_buffers_regenerated_each_start(self):
        self.animation.start(self.targets)
        self.run_to_end()

        self.animation.start(self.targets)

        cycle = names(self.catalog.symbols)
        for reel in self.animation.reels:
            self.assertEqual(names(reel.buffer.symbols), [cycle[i % 5] for i in range(50)])

    def test_cancel(self):
        self.animation.start(self.targets)
        self.animation.tick(FRAME)

        self.animation.cancel()

        self.assertFalse(self.animation.is_animating)
        self.assertEqual(self.animation.states, [ReelState.IDLE] * 3)
        self.assertEqual(self.animation.tick(FRAME), [])

    def test_tick_when_idle(self):
        self.assertEqual(self.animation.tick(FRAME), [])

    def test_config_overrides(self):
        animation = SpinAnimation(self.catalog.symbols, 2, {"reel_length": 12, "base_speed": 800.0})
        animation.start(self.targets[:2])
        self.assertEqual(animation.reels[0].buffer.length, 12)
        self.assertEqual(animation.reels[1].spin_speed, 850.0)


if __name__ == "__main__":
    unittest.main()
