"""Daily Sudoku game package.

This package exposes the public API surface via:

- ``daily_sudoku.engine.grid.SudokuGrid``: board state, conflicts and completion.
- ``daily_sudoku.engine.ranking``: score update policy and leaderboard standings.
- ``daily_sudoku.engine.session.SessionController``: composes both with a backend.
"""

from .engine.grid import SudokuGrid
from .engine.ranking import build_ranking, record_score
from .engine.session import SessionController, SessionTimer

__all__ = [
    "SudokuGrid",
    "build_ranking",
    "record_score",
    "SessionController",
    "SessionTimer",
]

__version__ = "0.1.0"
