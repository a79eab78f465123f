"""Placeholder trend badge derived from goals per game.

This is not a time-series trend; it only buckets the current scoring rate.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from ynwa_stats.models import PlayerRecord


@dataclass(frozen=True)
class Trend:
    direction: Literal["up", "down", "flat"]
    percentage: int


_RATE_BUCKETS: tuple[tuple[float, int], ...] = (
    (0.8, 25),
    (0.5, 15),
    (0.3, 8),
)
_BASELINE_PERCENTAGE = 5


def calculate_trend(player: PlayerRecord) -> Trend:
    for threshold, percentage in _RATE_BUCKETS:
        if player.per_game_rate > threshold:
            return Trend(direction="up", percentage=percentage)
    return Trend(direction="up", percentage=_BASELINE_PERCENTAGE)
