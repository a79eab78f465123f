"""Aggregation across competitions, ranking and the cache-aware service."""

from .ranking import DEFAULT_LEADERBOARD_SIZE, rank_players
from .service import (
    AggregationResult,
    LeaderboardResult,
    LeaderboardService,
    aggregate_players,
    merge_into_global,
)

__all__ = [
    "AggregationResult",
    "DEFAULT_LEADERBOARD_SIZE",
    "LeaderboardResult",
    "LeaderboardService",
    "aggregate_players",
    "merge_into_global",
    "rank_players",
]
