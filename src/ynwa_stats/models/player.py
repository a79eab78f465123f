"""Canonical player models shared across ingestion, ranking and the API."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class PlayerRecord(BaseModel):
    """Merged per-player statistics for one aggregation run."""

    player_id: int
    name: str
    photo: str | None = None
    team: str = ""
    competition: str = ""
    position: str | None = None
    goals: int = Field(default=0, ge=0)
    assists: int = Field(default=0, ge=0)
    appearances: int = Field(default=0, ge=0)
    rating: float = 0.0
    combined_score: int = Field(default=0, ge=0)
    per_game_rate: float = Field(default=0.0, ge=0.0)

    model_config = ConfigDict(frozen=True)

    def with_derived(self) -> "PlayerRecord":
        """Return a copy with ``combined_score`` and ``per_game_rate`` filled in."""

        rate = 0.0
        if self.appearances > 0:
            # Exact halves round up, e.g. 5 goals in 8 games is 0.63.
            ratio = Decimal(self.goals) / Decimal(self.appearances)
            rate = float(ratio.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
        return self.model_copy(
            update={
                "combined_score": self.goals + self.assists,
                "per_game_rate": rate,
            }
        )
