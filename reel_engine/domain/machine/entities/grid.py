# reel_engine/domain/machine/entities/grid.py
from typing import List, Sequence, Tuple

from reel_engine.domain.errors import InvariantViolation
from .symbol import Symbol

# Row-major: grid[row][reel]
Grid = Tuple[Tuple[Symbol, ...], ...]


def make_grid(rows: Sequence[Sequence[Symbol]]) -> Grid:
    return tuple(tuple(row) for row in rows)


def columns_to_grid(columns: Sequence[Sequence[Symbol]]) -> Grid:
    """
    Transpose per-reel columns (reel 0..N, each top..bottom) into the
    row-major grid used by the win detector: grid[row][col] = columns[col][row].
    """
    if not columns:
        return ()
    heights = {len(column) for column in columns}
    if len(heights) != 1:
        raise InvariantViolation(f"Columns have uneven heights: {sorted(heights)}")
    return tuple(
        tuple(columns[col][row] for col in range(len(columns)))
        for row in range(heights.pop())
    )


def grid_to_columns(grid: Sequence[Sequence[Symbol]]) -> List[List[Symbol]]:
    """Inverse of columns_to_grid: one top..bottom list per reel."""
    if not grid:
        return []
    widths = {len(row) for row in grid}
    if len(widths) != 1:
        raise InvariantViolation(f"Grid rows have uneven widths: {sorted(widths)}")
    return [[row[col] for row in grid] for col in range(widths.pop())]


def grid_names(grid: Sequence[Sequence[Symbol]]) -> List[List[str]]:
    return [[symbol.name for symbol in row] for row in grid]
