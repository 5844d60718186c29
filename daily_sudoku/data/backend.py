"""Persistence collaborators for puzzles and scores.

Two backends implement the same :class:`SudokuBackend` protocol:

- :class:`SupabaseBackend` talks to the hosted ``sudokus`` and
  ``sudoku_scores`` tables.
- :class:`LocalBackend` keeps JSON documents under
  ``local_db/collections/`` for offline play.
"""

from __future__ import annotations

import json
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol

from ..core.exceptions import BackendError, PuzzleLoadError, ScoreSaveError
from ..core.models import DailyPuzzle, Score
from ..engine.ranking import record_score
from ..io.codec import decode_digits, normalize_digits
from ..io.supabase_client import SupabaseClient
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

DEFAULT_STORE_DIR = Path("local_db/collections")


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


class SudokuBackend(Protocol):
    """Protocol implemented by every persistence backend."""

    def fetch_puzzle_for_today(self) -> DailyPuzzle:
        ...

    def fetch_player_score(self, puzzle_id: int, player: str) -> Optional[Score]:
        ...

    def fetch_all_scores(self, puzzle_id: int) -> List[Score]:
        ...

    def upsert_score(self, puzzle_id: int, player: str, elapsed_seconds: int) -> Score:
        ...


def puzzle_from_row(row: Mapping[str, Any], play_date: str) -> DailyPuzzle:
    """Decode a stored puzzle row; a missing solution decodes to all zeros."""

    try:
        if not row.get("puzzle"):
            raise PuzzleLoadError("Puzzle data is missing")
        return DailyPuzzle(
            id=int(row["id"]),
            puzzle=decode_digits(row["puzzle"]),
            solution=decode_digits(row.get("solution")),
            play_date=row.get("play_date") or play_date,
        )
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise PuzzleLoadError(f"Puzzle data is malformed: {exc!r}") from exc


def score_from_row(row: Mapping[str, Any], puzzle_id: Optional[int] = None) -> Score:
    """Decode a stored score row; ``puzzle_id`` overrides ``sudoku_id`` when given."""

    try:
        return Score(
            id=row.get("id"),
            puzzle_id=int(row["sudoku_id"]) if puzzle_id is None else puzzle_id,
            player=row["player_nickname"],
            elapsed_seconds=int(row["time_seconds"]),
            recorded_at=row.get("created_at"),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise BackendError(f"Score data is malformed: {exc!r}") from exc


# ----------------------------------------------------------------------
# Supabase
# ----------------------------------------------------------------------


class SupabaseBackend:
    """Backend over the hosted Supabase tables."""

    PUZZLE_TABLE = "sudokus"
    SCORE_TABLE = "sudoku_scores"
    SCORE_COLUMNS = "id, sudoku_id, player_nickname, time_seconds, created_at"

    def __init__(
        self,
        client: SupabaseClient,
        today: Callable[[], date] = utc_today,
    ) -> None:
        self.client = client
        self.today = today

    def fetch_puzzle_for_today(self) -> DailyPuzzle:
        play_date = self.today().isoformat()
        try:
            rows = self.client.select(
                self.PUZZLE_TABLE,
                columns="id, play_date, puzzle, solution",
                filters={"play_date": play_date},
                limit=1,
            )
        except BackendError as exc:
            raise PuzzleLoadError(f"Failed to fetch sudoku: {exc}") from exc
        if not rows:
            raise PuzzleLoadError(f"No sudoku found for date: {play_date}")
        puzzle = puzzle_from_row(rows[0], play_date)
        LOGGER.info("Loaded sudoku %s for %s", puzzle.id, puzzle.play_date)
        return puzzle

    def fetch_player_score(self, puzzle_id: int, player: str) -> Optional[Score]:
        rows = self.client.select(
            self.SCORE_TABLE,
            columns=self.SCORE_COLUMNS,
            filters={"sudoku_id": puzzle_id, "player_nickname": player},
            limit=1,
        )
        return score_from_row(rows[0]) if rows else None

    def fetch_all_scores(self, puzzle_id: int) -> List[Score]:
        rows = self.client.select(
            self.SCORE_TABLE,
            columns=self.SCORE_COLUMNS,
            filters={"sudoku_id": puzzle_id},
            order="time_seconds",
        )
        return [score_from_row(row) for row in rows]

    def upsert_score(self, puzzle_id: int, player: str, elapsed_seconds: int) -> Score:
        try:
            existing = self.fetch_player_score(puzzle_id, player)
            updated = record_score(existing, elapsed_seconds, puzzle_id=puzzle_id, player=player)
            if existing is None:
                row = self.client.insert(
                    self.SCORE_TABLE,
                    {
                        "sudoku_id": puzzle_id,
                        "player_nickname": player,
                        "time_seconds": elapsed_seconds,
                    },
                )
                return score_from_row(row)
            if updated is existing:
                LOGGER.info(
                    "Keeping existing time %ss for %s (submitted %ss)",
                    existing.elapsed_seconds, player, elapsed_seconds,
                )
                return existing
            row = self.client.update(
                self.SCORE_TABLE,
                {"time_seconds": updated.elapsed_seconds},
                filters={"id": existing.id},
            )
            return score_from_row(row)
        except BackendError as exc:
            raise ScoreSaveError(f"Failed to save score: {exc}") from exc


# ----------------------------------------------------------------------
# Local JSON store
# ----------------------------------------------------------------------


class LocalBackend:
    """Store puzzles and scores as JSON documents on disk.

    Layout
    ------
    ``sudokus/<play_date>.json`` holds one puzzle per calendar day.
    ``scores/<puzzle_id>.json`` holds every score recorded for that puzzle in
    submission order.
    """

    def __init__(
        self,
        store_dir: Path | str = DEFAULT_STORE_DIR,
        today: Callable[[], date] = utc_today,
    ) -> None:
        self.store_dir = Path(store_dir)
        self.puzzle_dir = self.store_dir / "sudokus"
        self.score_dir = self.store_dir / "scores"
        self.puzzle_dir.mkdir(parents=True, exist_ok=True)
        self.score_dir.mkdir(parents=True, exist_ok=True)
        self.today = today

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def add_puzzle(
        self,
        play_date: str,
        puzzle_digits: str,
        solution_digits: Optional[str] = None,
    ) -> DailyPuzzle:
        """Persist a puzzle for ``play_date`` and return it decoded."""
        path = self.puzzle_dir / f"{play_date}.json"
        if path.exists():
            doc = self._read(path)
            puzzle_id = int(doc["id"])
        else:
            puzzle_id = self._next_puzzle_id()
        doc = {
            "id": puzzle_id,
            "play_date": play_date,
            "puzzle": normalize_digits(puzzle_digits),
            "solution": normalize_digits(solution_digits) if solution_digits else None,
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        self._write(path, doc)
        LOGGER.info("Puzzle %s stored for %s", puzzle_id, play_date)
        return puzzle_from_row(doc, play_date)

    def fetch_puzzle_for_today(self) -> DailyPuzzle:
        play_date = self.today().isoformat()
        path = self.puzzle_dir / f"{play_date}.json"
        if not path.exists():
            raise PuzzleLoadError(f"No sudoku found for date: {play_date}")
        try:
            doc = self._read(path)
        except BackendError as exc:
            raise PuzzleLoadError(f"Failed to fetch sudoku: {exc}") from exc
        puzzle = puzzle_from_row(doc, play_date)
        LOGGER.info("Loaded sudoku %s for %s", puzzle.id, puzzle.play_date)
        return puzzle

    def fetch_player_score(self, puzzle_id: int, player: str) -> Optional[Score]:
        for score in self._load_scores(puzzle_id):
            if score.player == player:
                return score
        return None

    def fetch_all_scores(self, puzzle_id: int) -> List[Score]:
        return sorted(self._load_scores(puzzle_id), key=lambda score: score.elapsed_seconds)

    def upsert_score(self, puzzle_id: int, player: str, elapsed_seconds: int) -> Score:
        try:
            scores = self._load_scores(puzzle_id)
            index = next(
                (i for i, score in enumerate(scores) if score.player == player), None
            )
            existing = scores[index] if index is not None else None
            updated = record_score(existing, elapsed_seconds, puzzle_id=puzzle_id, player=player)
            if updated is existing:
                return updated
            if index is None:
                updated = Score(
                    id=len(scores) + 1,
                    puzzle_id=updated.puzzle_id,
                    player=updated.player,
                    elapsed_seconds=updated.elapsed_seconds,
                    recorded_at=updated.recorded_at,
                )
                scores.append(updated)
            else:
                scores[index] = updated
            self._save_scores(puzzle_id, scores)
        except (BackendError, OSError) as exc:
            raise ScoreSaveError(f"Failed to save score: {exc}") from exc
        LOGGER.info("Score saved: puzzle=%s player=%s time=%ss", puzzle_id, player, updated.elapsed_seconds)
        return updated

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _load_scores(self, puzzle_id: int) -> List[Score]:
        path = self.score_dir / f"{puzzle_id}.json"
        if not path.exists():
            return []
        doc = self._read(path)
        try:
            entries = list(doc.get("scores", []))
        except (TypeError, AttributeError) as exc:
            raise BackendError(f"Score document {path.name} is malformed: {exc!r}") from exc
        return [score_from_row(entry, puzzle_id) for entry in entries]

    def _save_scores(self, puzzle_id: int, scores: List[Score]) -> None:
        doc = {
            "sudoku_id": puzzle_id,
            "scores": [
                {
                    "id": score.id,
                    "player_nickname": score.player,
                    "time_seconds": score.elapsed_seconds,
                    "created_at": score.recorded_at,
                }
                for score in scores
            ],
        }
        self._write(self.score_dir / f"{puzzle_id}.json", doc)

    def _next_puzzle_id(self) -> int:
        ids = [int(self._read(path)["id"]) for path in self.puzzle_dir.glob("*.json")]
        return max(ids, default=0) + 1

    @staticmethod
    def _read(path: Path) -> Dict[str, Any]:
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            LOGGER.warning("Store read error (%s): %s", path.name, exc)
            raise BackendError(f"Unreadable document {path.name}: {exc}") from exc

    @staticmethod
    def _write(path: Path, doc: Dict[str, Any]) -> None:
        path.write_text(json.dumps(doc, ensure_ascii=False, indent=2), encoding="utf-8")
