"""Async client for the API-Football ranking feeds."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, List, Literal, Protocol

import httpx

from ynwa_stats.config import Competition, StatsSettings
from ynwa_stats.config.settings import DEFAULT_BASE_URL, DEFAULT_HTTP_TIMEOUT
from ynwa_stats.errors import ConfigurationError


logger = logging.getLogger(__name__)

FeedKind = Literal["topscorers", "topassists"]

_API_HOST = "v3.football.api-sports.io"
_AUTH_STATUS_CODES = {401, 403}
_AUTH_ERROR_KEYS = {"token", "key", "access"}


@dataclass(frozen=True)
class CompetitionFeeds:
    competition: Competition
    scorers: List[Any] = field(default_factory=list)
    assists: List[Any] = field(default_factory=list)


class FeedSource(Protocol):
    async def fetch_competition(self, competition: Competition, season: int) -> CompetitionFeeds:
        ...


def _auth_error(errors: Any) -> str | None:
    if isinstance(errors, dict):
        for key, message in errors.items():
            if str(key).lower() in _AUTH_ERROR_KEYS:
                return str(message)
    return None


class FeedClient:
    """Fetches raw ``players/topscorers`` and ``players/topassists`` responses.

    Transport failures, bad status codes and undecodable bodies are logged and
    returned as an empty list. A rejected API key is a configuration problem and
    raises :class:`ConfigurationError` instead.
    """

    def __init__(
        self,
        api_key: str | None,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not api_key or not api_key.strip():
            raise ConfigurationError(
                "API-Football key not configured",
                remedy="Set the API_FOOTBALL_KEY environment variable on the server running ynwa-stats.",
            )
        self._api_key = api_key.strip()
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(
        cls, settings: StatsSettings, *, transport: httpx.AsyncBaseTransport | None = None
    ) -> "FeedClient":
        return cls(
            settings.require_api_key(),
            base_url=settings.base_url,
            timeout=settings.http_timeout,
            transport=transport,
        )

    def __repr__(self) -> str:
        return f"FeedClient(base_url={self.base_url!r})"

    def _session(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "x-rapidapi-key": self._api_key,
                "x-rapidapi-host": _API_HOST,
            },
            timeout=self.timeout,
            transport=self._transport,
        )

    async def _get(self, client: httpx.AsyncClient, competition_id: int, season: int, kind: FeedKind) -> list:
        try:
            resp = await client.get(f"/players/{kind}", params={"league": competition_id, "season": season})
        except httpx.HTTPError as exc:
            logger.warning("Error fetching %s for league %s: %s", kind, competition_id, exc)
            return []

        if resp.status_code in _AUTH_STATUS_CODES:
            raise ConfigurationError(
                f"API-Football rejected the configured key (status {resp.status_code})",
                remedy="Check that API_FOOTBALL_KEY holds a valid, active API-Football key.",
            )
        if resp.is_error:
            logger.warning("API responded with status %s for %s league %s", resp.status_code, kind, competition_id)
            return []

        try:
            payload = resp.json()
        except ValueError as exc:
            logger.warning("Undecodable %s payload for league %s: %s", kind, competition_id, exc)
            return []
        if not isinstance(payload, dict):
            logger.warning("Unexpected %s payload type for league %s: %s", kind, competition_id, type(payload).__name__)
            return []

        errors = payload.get("errors")
        if errors:
            auth_message = _auth_error(errors)
            if auth_message:
                raise ConfigurationError(
                    f"API-Football rejected the configured key: {auth_message}",
                    remedy="Check that API_FOOTBALL_KEY holds a valid, active API-Football key.",
                )
            logger.warning("API reported errors for %s league %s: %s", kind, competition_id, errors)
            return []

        entries = payload.get("response")
        if not isinstance(entries, list):
            return []
        return entries

    async def fetch(self, competition_id: int, season: int, kind: FeedKind) -> list:
        """Return the raw entries of one feed, or ``[]`` if it could not be fetched."""

        async with self._session() as client:
            return await self._get(client, competition_id, season, kind)

    async def fetch_competition(self, competition: Competition, season: int) -> CompetitionFeeds:
        """Fetch both feeds of a competition concurrently."""

        async with self._session() as client:
            outcomes = await asyncio.gather(
                self._get(client, competition.competition_id, season, "topscorers"),
                self._get(client, competition.competition_id, season, "topassists"),
                return_exceptions=True,
            )
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                raise outcome
        scorers, assists = outcomes
        logger.info(
            "Fetched %s scorers and %s assist entries for %s",
            len(scorers),
            len(assists),
            competition.label,
        )
        return CompetitionFeeds(competition=competition, scorers=scorers, assists=assists)
