"""Runtime settings resolved from the server-side environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from datetime import timedelta
from pathlib import Path
from typing import Mapping, Optional, Tuple

from ynwa_stats.errors import ConfigurationError

from .competitions import Competition, parse_competitions


logger = logging.getLogger(__name__)

API_KEY_ENV = "API_FOOTBALL_KEY"
BASE_URL_ENV = "API_FOOTBALL_BASE_URL"
_SEASON_ENV = "YNWA_SEASON"
_CACHE_HOURS_ENV = "YNWA_CACHE_HOURS"
_LEADERBOARD_SIZE_ENV = "YNWA_LEADERBOARD_SIZE"
_COMPETITIONS_ENV = "YNWA_COMPETITIONS"
_HTTP_TIMEOUT_ENV = "YNWA_HTTP_TIMEOUT"
_CACHE_PATH_ENV = "YNWA_CACHE_PATH"

DEFAULT_BASE_URL = "https://v3.football.api-sports.io"
DEFAULT_SEASON = 2025
DEFAULT_CACHE_MAX_AGE = timedelta(hours=24)
DEFAULT_LEADERBOARD_SIZE = 10
DEFAULT_HTTP_TIMEOUT = 10.0
DEFAULT_COMPETITIONS: Tuple[Competition, ...] = (
    Competition(competition_id=39, label="Premier League"),
    Competition(competition_id=140, label="La Liga"),
)

# Value shipped in early configs; treated the same as an unset key.
_PLACEHOLDER_KEYS = {"YOUR_API_KEY_HERE"}


def _env_float(
    env: Mapping[str, str], name: str, default: float, *, clamp_min: float | None = None
) -> float:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid float for %s: %s; using default %.2f", name, raw, default)
        return default
    if clamp_min is not None:
        value = max(clamp_min, value)
    return value


def _env_int(env: Mapping[str, str], name: str, default: int, *, min_value: int | None = None) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


@dataclass(frozen=True)
class StatsSettings:
    """Everything an aggregation run needs.

    ``api_key`` is kept out of ``repr`` so settings can be logged safely, and
    nothing derived from it is ever returned to API or UI callers.
    """

    competitions: Tuple[Competition, ...] = DEFAULT_COMPETITIONS
    season: int = DEFAULT_SEASON
    cache_max_age: timedelta = DEFAULT_CACHE_MAX_AGE
    leaderboard_size: int = DEFAULT_LEADERBOARD_SIZE
    api_key: Optional[str] = field(default=None, repr=False)
    base_url: str = DEFAULT_BASE_URL
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    cache_path: Optional[Path] = None

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "StatsSettings":
        env = os.environ if env is None else env
        competitions = DEFAULT_COMPETITIONS
        raw_competitions = env.get(_COMPETITIONS_ENV)
        if raw_competitions and raw_competitions.strip():
            try:
                competitions = parse_competitions(raw_competitions) or DEFAULT_COMPETITIONS
            except ValueError as exc:
                raise ConfigurationError(
                    f"Invalid {_COMPETITIONS_ENV}: {exc}",
                    remedy=f"Set {_COMPETITIONS_ENV} to a list like '39=Premier League,140=La Liga'.",
                ) from exc
        cache_path = env.get(_CACHE_PATH_ENV)
        api_key = env.get(API_KEY_ENV)
        return cls(
            competitions=competitions,
            season=_env_int(env, _SEASON_ENV, DEFAULT_SEASON, min_value=1900),
            cache_max_age=timedelta(
                hours=_env_float(env, _CACHE_HOURS_ENV, DEFAULT_CACHE_MAX_AGE.total_seconds() / 3600, clamp_min=0.0)
            ),
            leaderboard_size=_env_int(env, _LEADERBOARD_SIZE_ENV, DEFAULT_LEADERBOARD_SIZE, min_value=0),
            api_key=api_key.strip() if api_key else None,
            base_url=(env.get(BASE_URL_ENV) or DEFAULT_BASE_URL).rstrip("/"),
            http_timeout=_env_float(env, _HTTP_TIMEOUT_ENV, DEFAULT_HTTP_TIMEOUT, clamp_min=0.1),
            cache_path=Path(cache_path) if cache_path else None,
        )

    def with_overrides(self, **changes) -> "StatsSettings":
        return replace(self, **{key: value for key, value in changes.items() if value is not None})

    def require_api_key(self) -> str:
        """Return the API key or raise ConfigurationError if it is unusable."""

        key = (self.api_key or "").strip()
        if not key or key in _PLACEHOLDER_KEYS:
            raise ConfigurationError(
                "API-Football key not configured",
                remedy=f"Set the {API_KEY_ENV} environment variable on the server running ynwa-stats.",
            )
        return key
