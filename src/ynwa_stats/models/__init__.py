"""Canonical player and leaderboard models."""

from .player import PlayerRecord
from .snapshot import LeaderboardSnapshot, utc_now

__all__ = ["PlayerRecord", "LeaderboardSnapshot", "utc_now"]
