"""Deterministic rule validation for Sudoku grids."""

from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import BOX_SIZE, EMPTY, GRID_SIZE
from ..core.models import Mask


def has_conflict(grid: Sequence[Sequence[int]], row: int, col: int) -> bool:
    """Return True when the value at ``(row, col)`` repeats in a peer group.

    Peers are the other cells of the row, the column and the 3x3 box. The box
    scan skips every cell that shares the row or the column with the target;
    those are already covered by the row and column scans.
    """

    value = grid[row][col]
    if value == EMPTY:
        return False

    for c in range(GRID_SIZE):
        if c != col and grid[row][c] == value:
            return True

    for r in range(GRID_SIZE):
        if r != row and grid[r][col] == value:
            return True

    box_row = (row // BOX_SIZE) * BOX_SIZE
    box_col = (col // BOX_SIZE) * BOX_SIZE
    for r in range(box_row, box_row + BOX_SIZE):
        for c in range(box_col, box_col + BOX_SIZE):
            if r != row and c != col and grid[r][c] == value:
                return True

    return False


def compute_conflicts(grid: Sequence[Sequence[int]]) -> Mask:
    """Return the conflict mask for ``grid``; empty cells are never flagged."""

    conflicts: Mask = [[False] * GRID_SIZE for _ in range(GRID_SIZE)]
    for r in range(GRID_SIZE):
        for c in range(GRID_SIZE):
            if grid[r][c] != EMPTY:
                conflicts[r][c] = has_conflict(grid, r, c)
    return conflicts


def has_any_solution_digit(solution: Optional[Sequence[Sequence[int]]]) -> bool:
    if not solution:
        return False
    return any(cell != EMPTY for row in solution for cell in row)


def is_complete(
    grid: Sequence[Sequence[int]],
    conflicts: Sequence[Sequence[bool]],
    solution: Optional[Sequence[Sequence[int]]] = None,
    has_solution: bool = False,
) -> bool:
    """Completion predicate.

    A grid is complete once every cell is filled and no cell conflicts. When a
    canonical solution is available the grid must also match it exactly;
    without one, a filled rule-consistent grid is accepted as solved.
    """

    for r in range(GRID_SIZE):
        for c in range(GRID_SIZE):
            if grid[r][c] == EMPTY:
                return False

    for r in range(GRID_SIZE):
        for c in range(GRID_SIZE):
            if conflicts[r][c]:
                return False

    if has_solution:
        if solution is None:
            return False
        for r in range(GRID_SIZE):
            for c in range(GRID_SIZE):
                if grid[r][c] != solution[r][c]:
                    return False

    return True


__all__ = ["has_conflict", "compute_conflicts", "has_any_solution_digit", "is_complete"]
