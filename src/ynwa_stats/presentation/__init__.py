"""Leaderboard presentation helpers (trend badge, CSV export)."""

from .export import LEADERBOARD_CSV_HEADERS, export_leaderboard_to_csv
from .trend import Trend, calculate_trend

__all__ = [
    "LEADERBOARD_CSV_HEADERS",
    "Trend",
    "calculate_trend",
    "export_leaderboard_to_csv",
]
