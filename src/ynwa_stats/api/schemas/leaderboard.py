from __future__ import annotations

from datetime import datetime
from typing import List, Literal

from pydantic import BaseModel, Field


class LeaderboardPlayerResponse(BaseModel):
    rank: int = Field(..., ge=1)
    player_id: int
    name: str
    photo: str | None
    team: str
    competition: str
    position: str | None
    goals: int
    assists: int
    appearances: int
    rating: float
    combined_score: int
    per_game_rate: float
    trend_direction: Literal["up", "down", "flat"]
    trend_percentage: int


class CompetitionReportResponse(BaseModel):
    competition: str
    scorer_entries: int
    assist_entries: int
    merged_players: int
    skipped_entries: int
    dropped_assist_only: int


class LeaderboardResponse(BaseModel):
    created_at: datetime
    age_seconds: float
    from_cache: bool
    players: List[LeaderboardPlayerResponse]
    reports: List[CompetitionReportResponse] = Field(default_factory=list)


class ConfigurationErrorResponse(BaseModel):
    error: Literal["configuration"] = "configuration"
    message: str
    remedy: str | None = None
