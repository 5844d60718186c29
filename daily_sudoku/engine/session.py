"""Session orchestration: puzzle load, play, completion and leaderboard.

The controller composes the grid engine and the ranking engine with the
persistence backend. Collaborator calls happen one at a time in the order a
session needs them; the engines themselves perform no I/O.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Callable, Optional

from ..core.constants import SessionState
from ..core.exceptions import BackendError, PuzzleLoadError
from ..core.models import DailyPuzzle, Ranking, Score
from ..io.codec import encode_digits
from ..utils.logger import get_logger
from .grid import SudokuGrid
from .ranking import build_ranking

if TYPE_CHECKING:
    from ..data.backend import SudokuBackend


LOGGER = get_logger(__name__)


class SessionTimer:
    """Whole-second counter that stops for good once the puzzle is solved."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self.clock = clock
        self.elapsed = 0
        self.running = False
        self.completed = False
        self._anchor: Optional[float] = None
        self._synced = 0

    def start(self) -> None:
        if self.completed or self.running:
            return
        self.running = True
        self._anchor = self.clock()
        self._synced = 0

    def tick(self) -> None:
        if self.running and not self.completed:
            self.elapsed += 1

    def sync(self) -> int:
        """Apply one tick per wall-clock second passed since :meth:`start`."""
        if self._anchor is None:
            return self.elapsed
        owed = int(self.clock() - self._anchor)
        for _ in range(owed - self._synced):
            self.tick()
        self._synced = max(self._synced, owed)
        return self.elapsed

    def stop(self) -> None:
        self.running = False
        self.completed = True


class SessionController:
    """Drive one player's session for today's puzzle.

    States move one way: ``NOT_STARTED -> IN_PROGRESS -> COMPLETED``. A player
    who already has a score for today lands in ``ALREADY_PLAYED`` and only
    sees the leaderboard.
    """

    def __init__(
        self,
        backend: "SudokuBackend",
        player: str,
        grid: Optional[SudokuGrid] = None,
        timer: Optional[SessionTimer] = None,
    ) -> None:
        self.backend = backend
        self.player = player
        self.grid = grid or SudokuGrid()
        self.timer = timer or SessionTimer()
        self.state = SessionState.NOT_STARTED
        self.puzzle: Optional[DailyPuzzle] = None
        self.score: Optional[Score] = None
        self.ranking: Optional[Ranking] = None
        self.error: Optional[str] = None
        self.warning: Optional[str] = None

    # ------------------------------------------------------------------
    # Public entrypoints
    # ------------------------------------------------------------------
    def load(self) -> SessionState:
        """Fetch today's puzzle and check whether the player already played."""
        try:
            puzzle = self.backend.fetch_puzzle_for_today()
            existing = self.backend.fetch_player_score(puzzle.id, self.player)
        except BackendError as exc:
            self.error = str(exc)
            LOGGER.error("Error loading puzzle: %s", exc)
            if isinstance(exc, PuzzleLoadError):
                raise
            raise PuzzleLoadError(str(exc)) from exc

        self.puzzle = puzzle
        if existing is not None:
            LOGGER.info(
                "%s already played sudoku %s (%ss); showing leaderboard",
                self.player, puzzle.id, existing.elapsed_seconds,
            )
            self.score = existing
            self.state = SessionState.ALREADY_PLAYED
            try:
                self._load_ranking(existing.elapsed_seconds)
            except BackendError as exc:
                self.error = str(exc)
                LOGGER.error("Error loading ranking: %s", exc)
            return self.state

        self.grid.load_puzzle(puzzle.puzzle, puzzle.solution)
        return self.state

    def start(self) -> None:
        if self.state != SessionState.NOT_STARTED or self.puzzle is None:
            return
        self.state = SessionState.IN_PROGRESS
        self.timer.start()
        LOGGER.info("Session started for %s on sudoku %s", self.player, self.puzzle.id)

    def select_cell(self, row: int, col: int) -> None:
        if self.state == SessionState.IN_PROGRESS:
            self.grid.select_cell(row, col)

    def set_value(self, value: int) -> None:
        if self.state != SessionState.IN_PROGRESS:
            return
        self.grid.set_value(value)
        if self.grid.is_complete():
            self._complete()

    def clear_value(self) -> None:
        self.set_value(0)

    def tick(self) -> None:
        self.timer.tick()

    @property
    def elapsed_seconds(self) -> int:
        return self.timer.elapsed

    @property
    def is_completed(self) -> bool:
        return self.state == SessionState.COMPLETED

    # ------------------------------------------------------------------
    # Completion
    # ------------------------------------------------------------------
    def _complete(self) -> None:
        if self.puzzle is None:
            return
        self.timer.stop()
        self.state = SessionState.COMPLETED
        elapsed = self.timer.elapsed
        LOGGER.info(
            "Sudoku %s completed by %s in %ss", self.puzzle.id, self.player, elapsed
        )
        LOGGER.debug("Final grid %s", encode_digits(self.grid.cells))

        try:
            self.score = self.backend.upsert_score(self.puzzle.id, self.player, elapsed)
        except BackendError as exc:
            self.error = f"Failed to save score: {exc}"
            LOGGER.error("Error saving score: %s", exc)
            return

        try:
            self._load_ranking(elapsed)
        except BackendError as exc:
            self.warning = f"Score saved, but failed to load ranking: {exc}"
            LOGGER.warning("Error loading ranking: %s", exc)

    def _load_ranking(self, player_time: int) -> None:
        if self.puzzle is None:
            return
        scores = self.backend.fetch_all_scores(self.puzzle.id)
        self.ranking = build_ranking(scores, self.player, player_time)
        LOGGER.info(
            "Leaderboard loaded: %s scores, %s at position %s",
            len(scores), self.player, self.ranking.current_user.position,
        )
