"""Configuration helpers for competitions and runtime settings."""

from .competitions import Competition, get_competition, iter_competitions, parse_competitions
from .settings import DEFAULT_COMPETITIONS, StatsSettings

__all__ = [
    "Competition",
    "DEFAULT_COMPETITIONS",
    "StatsSettings",
    "get_competition",
    "iter_competitions",
    "parse_competitions",
]
