"""Parsing of raw ``players/topscorers`` and ``players/topassists`` entries."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field

from ynwa_stats.errors import MalformedEntryError


def _block(container: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = container.get(key)
    return value if isinstance(value, Mapping) else {}


def _parse_count(value: Any, field: str) -> Optional[int]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise MalformedEntryError(f"{field} must be numeric, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise MalformedEntryError(f"{field} must be numeric, got {value!r}") from None


def _parse_rating(value: Any) -> float:
    if value is None or value == "":
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


class FeedEntry(BaseModel):
    """One player row from a ranking feed.

    Counts stay ``None`` when the feed omits them so callers can tell "absent"
    apart from an explicit zero.
    """

    player_id: int
    name: str
    photo: Optional[str] = None
    team: str = ""
    position: Optional[str] = None
    goals: Optional[int] = Field(default=None, ge=0)
    assists: Optional[int] = Field(default=None, ge=0)
    appearances: Optional[int] = Field(default=None, ge=0)
    rating: float = 0.0

    @classmethod
    def from_raw(cls, raw: Any) -> "FeedEntry":
        if not isinstance(raw, Mapping):
            raise MalformedEntryError(f"feed entry must be an object, got {type(raw).__name__}")
        player = _block(raw, "player")
        raw_id = player.get("id")
        if raw_id is None or isinstance(raw_id, bool):
            raise MalformedEntryError("feed entry has no player id")
        try:
            player_id = int(raw_id)
        except (TypeError, ValueError):
            raise MalformedEntryError(f"player id must be an integer, got {raw_id!r}") from None

        statistics = raw.get("statistics")
        if not statistics or not isinstance(statistics, (list, tuple)) or not isinstance(statistics[0], Mapping):
            raise MalformedEntryError(f"player {player_id} has no statistics block")
        stats = statistics[0]
        games = _block(stats, "games")
        goals = _block(stats, "goals")

        # API-Football spells the appearances field "appearences".
        appearances = games.get("appearences", games.get("appearances"))
        return cls(
            player_id=player_id,
            name=str(player.get("name") or ""),
            photo=player.get("photo") or None,
            team=str(_block(stats, "team").get("name") or ""),
            position=games.get("position") or None,
            goals=_parse_count(goals.get("total"), "goals.total"),
            assists=_parse_count(goals.get("assists"), "goals.assists"),
            appearances=_parse_count(appearances, "games.appearences"),
            rating=_parse_rating(games.get("rating")),
        )
