"""CSV export of a leaderboard snapshot."""

from __future__ import annotations

import csv
from io import StringIO

from ynwa_stats.models import LeaderboardSnapshot


LEADERBOARD_CSV_HEADERS: tuple[str, ...] = (
    "rank",
    "player_id",
    "name",
    "team",
    "competition",
    "position",
    "goals",
    "assists",
    "combined_score",
    "per_game_rate",
    "appearances",
    "rating",
)


def export_leaderboard_to_csv(snapshot: LeaderboardSnapshot) -> str:
    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(LEADERBOARD_CSV_HEADERS)
    for rank, player in enumerate(snapshot.players, start=1):
        writer.writerow([
            rank,
            player.player_id,
            player.name,
            player.team,
            player.competition,
            player.position or "",
            player.goals,
            player.assists,
            player.combined_score,
            f"{player.per_game_rate:.2f}",
            player.appearances,
            f"{player.rating:.2f}" if player.rating else "",
        ])
    return buffer.getvalue()


__all__ = ["LEADERBOARD_CSV_HEADERS", "export_leaderboard_to_csv"]
