"""Drive feed fetching, merging, ranking and caching for one leaderboard."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence

from ynwa_stats.config import Competition, StatsSettings
from ynwa_stats.errors import ConfigurationError
from ynwa_stats.feeds import CompetitionFeeds, FeedClient, FeedSource
from ynwa_stats.ingest import MergeReport, merge_competition_feeds
from ynwa_stats.models import LeaderboardSnapshot, PlayerRecord
from ynwa_stats.persistence import SnapshotCache

from .ranking import rank_players


logger = logging.getLogger(__name__)


@dataclass
class AggregationResult:
    players: Dict[int, PlayerRecord]
    reports: List[MergeReport] = field(default_factory=list)


@dataclass
class LeaderboardResult:
    snapshot: LeaderboardSnapshot
    from_cache: bool
    reports: List[MergeReport] = field(default_factory=list)


def merge_into_global(
    global_players: Dict[int, PlayerRecord],
    competition_players: Mapping[int, PlayerRecord],
) -> None:
    """Insert players not seen yet; an earlier competition's record always wins."""

    for player_id, record in competition_players.items():
        global_players.setdefault(player_id, record)


async def _fetch_competition(source: FeedSource, competition: Competition, season: int) -> CompetitionFeeds:
    try:
        return await source.fetch_competition(competition, season)
    except ConfigurationError:
        raise
    except Exception as exc:  # a failing competition contributes nothing
        logger.warning("Error fetching feeds for %s: %s", competition.label, exc)
        return CompetitionFeeds(competition=competition)


async def aggregate_players(
    competitions: Sequence[Competition],
    season: int,
    source: FeedSource,
) -> AggregationResult:
    """Fetch every competition concurrently, then merge in configuration order."""

    fetched = await asyncio.gather(
        *(_fetch_competition(source, competition, season) for competition in competitions),
        return_exceptions=True,
    )
    for outcome in fetched:
        if isinstance(outcome, BaseException):
            raise outcome

    global_players: Dict[int, PlayerRecord] = {}
    reports: List[MergeReport] = []
    for feeds in fetched:
        competition_players, report = merge_competition_feeds(feeds)
        merge_into_global(global_players, competition_players)
        reports.append(report)

    players = {player_id: record.with_derived() for player_id, record in global_players.items()}
    logger.info(
        "Aggregated %s players from %s competitions",
        len(players),
        len(competitions),
    )
    return AggregationResult(players=players, reports=reports)


class LeaderboardService:
    """Serve the cached leaderboard, rebuilding it when the cache has nothing valid.

    The service keeps no state between runs apart from the injected cache.
    """

    def __init__(
        self,
        settings: StatsSettings,
        cache: SnapshotCache,
        *,
        feed_source: Optional[FeedSource] = None,
    ):
        self.settings = settings
        self.cache = cache
        self._feed_source = feed_source

    def _source(self) -> FeedSource:
        if self._feed_source is not None:
            return self._feed_source
        return FeedClient.from_settings(self.settings)

    async def rebuild(self, source: Optional[FeedSource] = None) -> LeaderboardResult:
        if source is None:
            source = self._source()
        result = await aggregate_players(self.settings.competitions, self.settings.season, source)
        leaderboard = rank_players(result.players.values(), self.settings.leaderboard_size)
        snapshot = self.cache.put(leaderboard)
        return LeaderboardResult(snapshot=snapshot, from_cache=False, reports=result.reports)

    async def get_leaderboard(self) -> LeaderboardResult:
        snapshot = self.cache.get()
        if snapshot is not None:
            logger.debug("Using cached leaderboard from %s", snapshot.created_at.isoformat())
            return LeaderboardResult(snapshot=snapshot, from_cache=True)
        logger.info("Fetching fresh leaderboard data")
        return await self.rebuild()

    async def refresh(self) -> LeaderboardResult:
        """Drop the cached snapshot and rebuild from the feeds."""

        # A configuration error must leave the cached snapshot in place.
        source = self._source()
        self.cache.invalidate()
        return await self.rebuild(source)
