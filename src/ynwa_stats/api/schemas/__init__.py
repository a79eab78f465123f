"""Pydantic models for API I/O."""

from .leaderboard import (
    CompetitionReportResponse,
    ConfigurationErrorResponse,
    LeaderboardPlayerResponse,
    LeaderboardResponse,
)

__all__ = [
    "CompetitionReportResponse",
    "ConfigurationErrorResponse",
    "LeaderboardPlayerResponse",
    "LeaderboardResponse",
]
