"""Shared constants and enumerations for the daily Sudoku game."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

GRID_SIZE = 9
BOX_SIZE = 3
CELL_COUNT = GRID_SIZE * GRID_SIZE
EMPTY = 0
MAX_DIGIT = 9
TOP_ENTRIES = 6


class SessionState(str, Enum):
    """Lifecycle of a single daily session."""

    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    ALREADY_PLAYED = "ALREADY_PLAYED"


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int = GRID_SIZE
    cols: int = GRID_SIZE

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols


BOARD = Bounds()
