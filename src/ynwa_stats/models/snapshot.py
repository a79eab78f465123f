"""Immutable leaderboard snapshot stored by the cache layer."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Tuple

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from .player import PlayerRecord


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class LeaderboardSnapshot(BaseModel):
    """Ranked players plus the moment the ranking was computed."""

    players: Tuple[PlayerRecord, ...] = Field(default_factory=tuple)
    created_at: datetime = Field(default_factory=utc_now)

    model_config = ConfigDict(frozen=True)

    @field_validator("created_at")
    @classmethod
    def _ensure_aware(cls, value: datetime) -> datetime:
        # Naive timestamps come from older cache rows; treat them as UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def age(self, now: datetime | None = None) -> timedelta:
        return (now or utc_now()) - self.created_at

    def is_fresh(self, max_age: timedelta, now: datetime | None = None) -> bool:
        return self.age(now) < max_age
