# reel_engine/domain/machine/services/win_evaluation.py
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence, Tuple

from reel_engine.domain.errors import InvariantViolation
from reel_engine.domain.machine.entities.symbol import Symbol


class LineType(Enum):
    ROW = "row"
    COLUMN = "column"
    DIAGONAL = "diagonal"


@dataclass(frozen=True)
class LineKind:
    """
    Tag of a winning line. For DIAGONAL, index 0 runs top-left to
    bottom-right and index 1 runs top-right to bottom-left.
    """
    type: LineType
    index: int

    @classmethod
    def row(cls, index: int) -> "LineKind":
        return cls(LineType.ROW, index)

    @classmethod
    def column(cls, index: int) -> "LineKind":
        return cls(LineType.COLUMN, index)

    @classmethod
    def diagonal(cls, index: int) -> "LineKind":
        if index not in (0, 1):
            raise ValueError(f"Diagonal index must be 0 or 1, got {index}")
        return cls(LineType.DIAGONAL, index)

    def __str__(self) -> str:
        return f"{self.type.name.capitalize()}({self.index})"


@dataclass(frozen=True)
class WinningLine:
    symbols: Tuple[Symbol, ...]
    kind: LineKind

    @property
    def symbol(self) -> Symbol:
        """The symbol that pays for this line."""
        return self.symbols[0]

    def to_dict(self):
        return {
            "kind": self.kind.type.value,
            "index": self.kind.index,
            "symbol": self.symbol.name,
            "symbols": [s.name for s in self.symbols],
        }


class WinEvaluator:
    """
    Service for detecting winning lines on a finalized grid.
    A line wins when every symbol on it shares the first symbol's name.
    """

    def __init__(self, include_columns: bool = True):
        """
        Args:
            include_columns: Whether vertical lines are evaluated. Off for
                grids produced by circular animated reels.
        """
        self.include_columns = include_columns
        self.logger = logging.getLogger("domain.machine.win_evaluator")

    def find_wins(self, grid: Sequence[Sequence[Symbol]]) -> List[WinningLine]:
        """
        Scan rows, then columns (if enabled), then both diagonals.

        Args:
            grid: Row-major square grid

        Returns:
            Every qualifying line, possibly empty

        Raises:
            InvariantViolation: If the grid is empty, ragged or not square
        """
        rows, cols = self._check_grid(grid)
        wins = []

        for row in range(rows):
            line = tuple(grid[row])
            if self._is_winning(line):
                wins.append(WinningLine(line, LineKind.row(row)))

        if self.include_columns:
            for col in range(cols):
                line = tuple(grid[row][col] for row in range(rows))
                if self._is_winning(line):
                    wins.append(WinningLine(line, LineKind.column(col)))

        main_diagonal = tuple(grid[i][i] for i in range(rows))
        if self._is_winning(main_diagonal):
            wins.append(WinningLine(main_diagonal, LineKind.diagonal(0)))

        anti_diagonal = tuple(grid[i][cols - 1 - i] for i in range(rows))
        if self._is_winning(anti_diagonal):
            wins.append(WinningLine(anti_diagonal, LineKind.diagonal(1)))

        if wins:
            self.logger.debug(
                f"Found {len(wins)} winning lines: "
                f"{[f'{w.kind} {w.symbol.name}' for w in wins]}"
            )
        return wins

    @staticmethod
    def _is_winning(line: Sequence[Symbol]) -> bool:
        return all(symbol.matches(line[0]) for symbol in line)

    def _check_grid(self, grid: Sequence[Sequence[Symbol]]) -> Tuple[int, int]:
        if not grid or not grid[0]:
            error_msg = f"Invalid input values! grid: {grid}"
            self.logger.error(error_msg)
            raise InvariantViolation(error_msg)

        rows, cols = len(grid), len(grid[0])
        if any(len(row) != cols for row in grid):
            error_msg = f"Ragged grid: row widths {[len(row) for row in grid]}"
            self.logger.error(error_msg)
            raise InvariantViolation(error_msg)

        if rows != cols:
            error_msg = f"Diagonals need a square grid, got {rows} rows x {cols} reels"
            self.logger.error(error_msg)
            raise InvariantViolation(error_msg)

        return rows, cols


def find_wins(grid: Sequence[Sequence[Symbol]], include_columns: bool = True) -> List[WinningLine]:
    return WinEvaluator(include_columns).find_wins(grid)
