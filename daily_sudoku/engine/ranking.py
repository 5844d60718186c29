"""Score update policy and leaderboard standings."""

from __future__ import annotations

import dataclasses
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from ..core.constants import TOP_ENTRIES
from ..core.models import Ranking, RankingEntry, Score


def record_score(
    existing: Optional[Score],
    new_time: int,
    puzzle_id: Optional[int] = None,
    player: Optional[str] = None,
) -> Score:
    """Apply the lower-time-wins policy to a score submission.

    ``puzzle_id`` and ``player`` are only needed when there is no existing
    score to update. Replaying a time that is not strictly better returns
    ``existing`` untouched.
    """

    if existing is None:
        if puzzle_id is None or player is None:
            raise ValueError("puzzle_id and player are required for a first score")
        return Score(
            puzzle_id=puzzle_id,
            player=player,
            elapsed_seconds=new_time,
            recorded_at=datetime.now(timezone.utc).isoformat(),
        )
    if new_time < existing.elapsed_seconds:
        return dataclasses.replace(existing, elapsed_seconds=new_time)
    return existing


def player_position(scores: Sequence[Score], player: str, player_time: int) -> int:
    """1-indexed position of ``player`` in ``scores``.

    Players missing from the list get the rank they would take if inserted:
    one past the number of strictly faster times.
    """

    for index, score in enumerate(scores):
        if score.player == player:
            return index + 1
    faster = sum(1 for score in scores if score.elapsed_seconds < player_time)
    return faster + 1


def build_ranking(
    scores: Sequence[Score],
    current_player: str,
    current_time: int,
    limit: int = TOP_ENTRIES,
) -> Ranking:
    """Build leaderboard rows from ``scores`` sorted ascending by time.

    Ties keep the order of the input list. The current player's row in the top
    entries is replaced by their own time and flagged as improved; the input
    list itself is never modified.
    """

    present = any(score.player == current_player for score in scores)
    position = player_position(scores, current_player, current_time)

    top_entries: List[RankingEntry] = [
        RankingEntry(
            position=index + 1,
            player=score.player,
            elapsed_seconds=score.elapsed_seconds,
        )
        for index, score in enumerate(scores[:limit])
    ]

    current_user = RankingEntry(
        position=position,
        player=current_player,
        elapsed_seconds=current_time,
        improved=True,
    )
    if present and position <= limit:
        top_entries[position - 1] = current_user

    return Ranking(top_entries=top_entries, current_user=current_user)


__all__ = ["record_score", "player_position", "build_ranking"]
