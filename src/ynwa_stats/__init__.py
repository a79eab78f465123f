"""Combined goals + assists leaderboards built from API-Football feeds."""

__version__ = "0.1.0"
