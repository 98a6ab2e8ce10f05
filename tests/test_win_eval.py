# tests/test_win_eval.py
import unittest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from reel_engine.domain.errors import InvariantViolation
from reel_engine.domain.machine.entities.symbol import Symbol
from reel_engine.domain.machine.services.win_evaluation import (
    LineKind, LineType, WinEvaluator, find_wins
)


def sym(name):
    return Symbol(name.lower(), name, 1.0, 0.0, 1.0)


def grid_of(names):
    return [[sym(n) for n in row] for row in names]


class TestWinEvaluation(unittest.TestCase):
    """Test cases for winning line detection."""

    def setUp(self):
        self.evaluator = WinEvaluator()

    def test_single_row_win(self):
        grid = grid_of([
            ["Cherry", "Cherry", "Cherry"],
            ["Lemon", "Bell", "Star"],
            ["Seven", "Lemon", "Bell"],
        ])

        wins = self.evaluator.find_wins(grid)

        self.assertEqual(len(wins), 1)
        self.assertEqual(wins[0].kind, LineKind.row(0))
        self.assertEqual(wins[0].symbol.name, "Cherry")
        self.assertEqual(str(wins[0].kind), "Row(0)")

    def test_no_wins(self):
        grid = grid_of([
            ["Cherry", "Lemon", "Bell"],
            ["Lemon", "Cherry", "Star"],
            ["Star", "Bell", "Lemon"],
        ])
        self.assertEqual(self.evaluator.find_wins(grid), [])

    def test_rows_and_both_diagonals(self):
        grid = grid_of([
            ["A", "A", "A"],
            ["B", "A", "C"],
            ["A", "D", "A"],
        ])

        wins = self.evaluator.find_wins(grid)

        self.assertEqual(
            [w.kind for w in wins],
            [LineKind.row(0), LineKind.diagonal(0), LineKind.diagonal(1)],
        )
        for line in wins:
            self.assertEqual(len(line.symbols), 3)
            self.assertTrue(all(s.name == "A" for s in line.symbols))

    def test_column_wins_can_be_disabled(self):
        grid = grid_of([
            ["A", "B", "C"],
            ["A", "C", "B"],
            ["A", "D", "E"],
        ])

        with_columns = find_wins(grid)
        without_columns = find_wins(grid, include_columns=False)

        self.assertEqual([w.kind for w in with_columns], [LineKind.column(0)])
        self.assertEqual(without_columns, [])

    def test_scan_order(self):
        grid = grid_of([
            ["A", "A", "A"],
            ["A", "A", "A"],
            ["A", "A", "A"],
        ])

        kinds = [w.kind for w in self.evaluator.find_wins(grid)]

        self.assertEqual(kinds, [
            LineKind.row(0), LineKind.row(1), LineKind.row(2),
            LineKind.column(0), LineKind.column(1), LineKind.column(2),
            LineKind.diagonal(0), LineKind.diagonal(1),
        ])

    def test_matches_by_name(self):
        grid = [
            [Symbol("x", "A", 1, 0, 50), Symbol("y", "A", 1, 0, 1), Symbol("z", "A", 1, 0, 3)],
            [sym("B"), sym("C"), sym("D")],
            [sym("E"), sym("F"), sym("G")],
        ]
        self.assertEqual([w.kind for w in self.evaluator.find_wins(grid)], [LineKind.row(0)])

    def test_larger_square_grid(self):
        names = [[f"S{r}{c}" for c in range(4)] for r in range(4)]
        names[2] = ["Z"] * 4
        wins = self.evaluator.find_wins(grid_of(names))
        self.assertEqual([w.kind for w in wins], [LineKind.row(2)])
        self.assertEqual(len(wins[0].symbols), 4)

    def test_invalid_grids(self):
        with self.assertRaises(InvariantViolation):
            self.evaluator.find_wins([])
        with self.assertRaises(InvariantViolation):
            self.evaluator.find_wins(grid_of([["A", "A", "A"], ["A", "A", "A"]]))
        with self.assertRaises(InvariantViolation):
            self.evaluator.find_wins(grid_of([["A", "A"], ["A"]]))

    def test_winning_line_dict(self):
        wins = find_wins(grid_of([["A", "B"], ["C", "A"]]))
        self.assertEqual(wins[0].to_dict(), {
            "kind": "diagonal",
            "index": 0,
            "symbol": "A",
            "symbols": ["A", "A"],
        })

    def test_diagonal_index_bounds(self):
        with self.assertRaises(ValueError):
            LineKind.diagonal(2)
        self.assertEqual(LineKind.column(1).type, LineType.COLUMN)


if __name__ == "__main__":
    unittest.main()
