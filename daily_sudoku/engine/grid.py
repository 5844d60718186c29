"""Grid representation and player editing helpers."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from ..core.constants import EMPTY, GRID_SIZE, MAX_DIGIT
from ..core.models import Grid, Mask
from ..utils.logger import get_logger
from .validator import compute_conflicts, has_any_solution_digit, is_complete


LOGGER = get_logger(__name__)


def empty_grid() -> Grid:
    return [[EMPTY] * GRID_SIZE for _ in range(GRID_SIZE)]


def empty_mask() -> Mask:
    return [[False] * GRID_SIZE for _ in range(GRID_SIZE)]


class SudokuGrid:
    """Encapsulates the 9x9 board, its clue mask and derived conflict state.

    Every mutation recomputes the conflict mask synchronously, so
    :attr:`conflicts` always describes the current cell values.
    """

    def __init__(self) -> None:
        self.cells: Grid = empty_grid()
        self.clues: Mask = empty_mask()
        self.solution: Grid = empty_grid()
        self.has_solution = False
        self.selection: Optional[Tuple[int, int]] = None
        self.conflicts: Mask = empty_mask()

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def load_puzzle(
        self,
        initial_values: Sequence[Sequence[int]],
        solution: Optional[Sequence[Sequence[int]]] = None,
    ) -> None:
        """Reset the board to ``initial_values``; non-zero cells become clues."""

        self.cells = [list(row) for row in initial_values]
        self.clues = [[value != EMPTY for value in row] for row in self.cells]
        if solution is not None and has_any_solution_digit(solution):
            self.solution = [list(row) for row in solution]
            self.has_solution = True
        else:
            self.solution = empty_grid()
            self.has_solution = False
        self.selection = None
        self._refresh()
        LOGGER.debug(
            "Loaded puzzle with %s clues (solution available: %s)",
            self.clue_count(),
            self.has_solution,
        )

    # ------------------------------------------------------------------
    # Player edits
    # ------------------------------------------------------------------
    def select_cell(self, row: int, col: int) -> None:
        if self.clues[row][col]:
            return
        self.selection = (row, col)

    def set_value(self, value: int) -> None:
        """Write ``value`` into the selected cell; ``0`` clears it."""

        if not 0 <= value <= MAX_DIGIT:
            raise ValueError(f"Cell value must be between 0 and {MAX_DIGIT}, got {value}")
        if self.selection is None:
            return
        row, col = self.selection
        if self.clues[row][col]:
            return
        self.cells[row][col] = value
        self._refresh()

    def clear_value(self) -> None:
        self.set_value(EMPTY)

    def _refresh(self) -> None:
        self.conflicts = compute_conflicts(self.cells)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def value(self, row: int, col: int) -> int:
        return self.cells[row][col]

    def is_clue(self, row: int, col: int) -> bool:
        return self.clues[row][col]

    def is_complete(self) -> bool:
        return is_complete(self.cells, self.conflicts, self.solution, self.has_solution)

    def clue_count(self) -> int:
        return sum(1 for row in self.clues for flag in row if flag)

    def filled_count(self) -> int:
        return sum(1 for row in self.cells for value in row if value != EMPTY)

    def conflict_cells(self) -> List[Tuple[int, int]]:
        return [
            (r, c)
            for r in range(GRID_SIZE)
            for c in range(GRID_SIZE)
            if self.conflicts[r][c]
        ]
