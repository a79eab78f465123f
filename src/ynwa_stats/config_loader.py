"""Persist and load non-secret CLI settings profiles."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import Dict, Optional

from ynwa_stats.config import Competition, StatsSettings


@dataclass
class SettingsProfile:
    competitions: Dict[int, str] = field(default_factory=dict)
    season: Optional[int] = None
    leaderboard_size: Optional[int] = None
    cache_hours: Optional[float] = None

    @classmethod
    def load(cls, path: Path) -> "SettingsProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls(
            competitions={int(key): str(value) for key, value in data.get("competitions", {}).items()},
            season=data.get("season"),
            leaderboard_size=data.get("leaderboard_size"),
            cache_hours=data.get("cache_hours"),
        )

    @classmethod
    def from_settings(cls, settings: StatsSettings) -> "SettingsProfile":
        return cls(
            competitions={comp.competition_id: comp.label for comp in settings.competitions},
            season=settings.season,
            leaderboard_size=settings.leaderboard_size,
            cache_hours=settings.cache_max_age.total_seconds() / 3600,
        )

    def save(self, path: Path) -> None:
        # The API key is deliberately not part of the profile.
        payload = {
            "competitions": {str(key): value for key, value in self.competitions.items()},
            "season": self.season,
            "leaderboard_size": self.leaderboard_size,
            "cache_hours": self.cache_hours,
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def apply(self, settings: StatsSettings) -> StatsSettings:
        competitions = None
        if self.competitions:
            competitions = tuple(
                Competition(competition_id=comp_id, label=label)
                for comp_id, label in self.competitions.items()
            )
        return settings.with_overrides(
            competitions=competitions,
            season=self.season,
            leaderboard_size=self.leaderboard_size,
            cache_max_age=timedelta(hours=self.cache_hours) if self.cache_hours is not None else None,
        )
