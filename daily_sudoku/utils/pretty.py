"""Pretty-print helpers for Sudoku grids and leaderboards."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from ..core.constants import BOX_SIZE, EMPTY, GRID_SIZE

if TYPE_CHECKING:
    from ..core.models import Ranking, RankingEntry
    from ..engine.grid import SudokuGrid


MEDALS = {1: "gold", 2: "silver", 3: "bronze"}


def format_time(seconds: int) -> str:
    """Render elapsed seconds as ``MM:SS``."""
    minutes, secs = divmod(seconds, 60)
    return f"{minutes:02d}:{secs:02d}"


def cell_symbol(grid: SudokuGrid, row: int, col: int) -> str:
    value = grid.value(row, col)
    if value == EMPTY:
        text = "."
    else:
        text = str(value)
    if grid.is_clue(row, col):
        return f"[{text}]"
    if grid.conflicts[row][col]:
        return f"!{text}!"
    if grid.selection == (row, col):
        return f"<{text}>"
    return f" {text} "


def format_grid(grid: SudokuGrid) -> str:
    """Clues are bracketed, conflicts wrapped in ``!`` and the selection in ``<>``."""
    header = "     " + "".join(
        f" {c} " + (" " if c % BOX_SIZE == BOX_SIZE - 1 and c < GRID_SIZE - 1 else "")
        for c in range(GRID_SIZE)
    )
    separator = "    " + "-" * (len(header) - 4)
    lines = [header, separator]
    for r in range(GRID_SIZE):
        parts = []
        for c in range(GRID_SIZE):
            parts.append(cell_symbol(grid, r, c))
            if c % BOX_SIZE == BOX_SIZE - 1 and c < GRID_SIZE - 1:
                parts.append("|")
        lines.append(f"{r:>2} | " + "".join(parts))
        if r % BOX_SIZE == BOX_SIZE - 1 and r < GRID_SIZE - 1:
            lines.append(separator)
    return "\n".join(lines)


def pretty_print_grid(grid: SudokuGrid, *, label: str | None = None, stream=None) -> None:
    """Print the Sudoku grid in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_grid(grid), file=stream)


def format_entry(entry: RankingEntry) -> str:
    medal = MEDALS.get(entry.position, "")
    marker = " *" if entry.improved else ""
    return f"{entry.position:>3}. {entry.player:<24} {format_time(entry.elapsed_seconds):>6} {medal}{marker}".rstrip()


def print_ranking(ranking: Ranking, *, stream=None) -> None:
    """Print the top entries followed by the current player's row."""

    stream = stream or sys.stdout
    print("--- Leaderboard ---", file=stream)
    if not ranking.top_entries:
        print("  (no scores yet)", file=stream)
    for entry in ranking.top_entries:
        print(format_entry(entry), file=stream)
    if ranking.current_user is not None:
        print(file=stream)
        print("--- You ---", file=stream)
        print(format_entry(ranking.current_user), file=stream)
