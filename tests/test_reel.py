# tests/test_reel.py
import unittest
import sys
import os
from collections import Counter

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from reel_engine.domain.errors import ConfigurationError
from reel_engine.domain.machine.entities.reel import Reel, draw_reel
from reel_engine.domain.machine.entities.symbol import Symbol, default_catalog
from reel_engine.infrastructure.rng.strategies.mersenne_rng import MersenneTwisterRNG


class ScriptedRNG:
    """Returns pre-defined weighted indices, in order."""
    def __init__(self, indices):
        self.indices = list(indices)
        self.seen_weights = []

    def weighted_index(self, weights):
        self.seen_weights.append(list(weights))
        return self.indices.pop(0)

    def get_random_int(self, min_val, max_val):
        return min_val


class TestReel(unittest.TestCase):
    """Test the weighted reel."""

    def setUp(self):
        self.symbols = default_catalog().symbols
        self.reel = Reel(self.symbols, "test_reel", MersenneTwisterRNG(12345))

    def test_construction(self):
        self.assertEqual(self.reel.length, 5)
        self.assertEqual(self.reel.total_weight, 100.0)
        self.assertAlmostEqual(self.reel.probability("Cherry"), 0.5)
        self.assertAlmostEqual(self.reel.probability("Seven"), 0.01)
        self.assertEqual(self.reel.probability("Missing"), 0.0)

    def test_invalid_pools(self):
        with self.assertRaises(ConfigurationError):
            Reel([])
        with self.assertRaises(ConfigurationError):
            Reel([Symbol("a", "A", weight=-1.0), Symbol("b", "B", weight=2.0)])
        with self.assertRaises(ConfigurationError):
            Reel([Symbol("a", "A", weight=0.0), Symbol("b", "B", weight=0.0)])

    def test_draw_without_rng(self):
        reel = Reel(self.symbols)
        with self.assertRaises(ValueError):
            reel.draw()

    def test_draw_returns_pool_member(self):
        for _ in range(100):
            self.assertIn(draw_reel(self.reel), self.symbols)

    def test_frequencies_converge_to_weights(self):
        draws = 100000
        counts = Counter(self.reel.draw().name for _ in range(draws))

        for symbol in self.symbols:
            with self.subTest(symbol=symbol.name):
                self.assertAlmostEqual(counts[symbol.name] / draws, symbol.weight / 100.0, delta=0.01)

    def test_zero_weight_never_drawn(self):
        reel = Reel([
            Symbol("a", "A", weight=1.0),
            Symbol("b", "B", weight=0.0),
            Symbol("c", "C", weight=3.0),
        ], rng_strategy=MersenneTwisterRNG(1))

        names = {reel.draw().name for _ in range(5000)}
        self.assertEqual(names, {"A", "C"})

    def test_duplicate_names_pool_their_weight(self):
        reel = Reel([
            Symbol("a", "A", weight=1.0),
            Symbol("a", "A", weight=2.0),
            Symbol("b", "B", weight=1.0),
        ])
        self.assertAlmostEqual(reel.probability("A"), 0.75)

    def test_draw_distinct_never_repeats_names(self):
        for _ in range(200):
            column = self.reel.draw_distinct(3)
            names = [s.name for s in column]
            self.assertEqual(len(set(names)), 3)

    def test_draw_distinct_reweights_remaining_names(self):
        rng = ScriptedRNG([0, 0, 1])
        reel = Reel(self.symbols, rng_strategy=rng)

        column = reel.draw_distinct(3)

        self.assertEqual([s.name for s in column], ["Cherry", "Lemon", "Star"])
        self.assertEqual(rng.seen_weights[0], [50.0, 30.0, 15.0, 4.0, 1.0])
        self.assertEqual(rng.seen_weights[1], [30.0, 15.0, 4.0, 1.0])
        self.assertEqual(rng.seen_weights[2], [15.0, 4.0, 1.0])

    def test_draw_distinct_needs_enough_names(self):
        reel = Reel([
            Symbol("a", "A", weight=1.0),
            Symbol("a", "A", weight=1.0),
            Symbol("b", "B", weight=1.0),
            Symbol("c", "C", weight=0.0),
        ], rng_strategy=MersenneTwisterRNG(1))

        with self.assertRaises(ConfigurationError):
            reel.draw_distinct(3)


if __name__ == "__main__":
    unittest.main()
