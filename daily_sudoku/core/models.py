"""Data models shared by the engines and the persistence layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

Grid = List[List[int]]
Mask = List[List[bool]]


@dataclass
class DailyPuzzle:
    """A puzzle as served for one calendar day."""

    id: int
    puzzle: Grid
    solution: Grid
    play_date: str


@dataclass(frozen=True)
class Score:
    """Best recorded time for one player on one puzzle."""

    puzzle_id: int
    player: str
    elapsed_seconds: int
    recorded_at: Optional[str] = None
    id: Optional[int] = None


@dataclass(frozen=True)
class RankingEntry:
    """Single leaderboard row."""

    position: int
    player: str
    elapsed_seconds: int
    improved: bool = False


@dataclass
class Ranking:
    """Top of the leaderboard plus the current player's own row."""

    top_entries: List[RankingEntry] = field(default_factory=list)
    current_user: Optional[RankingEntry] = None
