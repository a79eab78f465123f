"""Leaderboard ordering."""

from __future__ import annotations

from typing import Iterable, List

from ynwa_stats.config.settings import DEFAULT_LEADERBOARD_SIZE
from ynwa_stats.models import PlayerRecord


def rank_players(players: Iterable[PlayerRecord], limit: int = DEFAULT_LEADERBOARD_SIZE) -> List[PlayerRecord]:
    """Sort by combined score descending and keep the top ``limit``.

    ``sorted`` is stable, so tied players keep their insertion order.
    """

    if limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")
    ordered = sorted(players, key=lambda player: player.combined_score, reverse=True)
    return ordered[:limit]
