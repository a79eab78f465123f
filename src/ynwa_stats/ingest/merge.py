"""Combine one competition's scorer and assist feeds into player records."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple

from pydantic import ValidationError

from ynwa_stats.errors import MalformedEntryError
from ynwa_stats.feeds import CompetitionFeeds, FeedEntry
from ynwa_stats.models import PlayerRecord


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MergeReport:
    competition: str
    scorer_entries: int
    assist_entries: int
    merged_players: int
    skipped_entries: List[str] = field(default_factory=list)
    dropped_assist_only: List[int] = field(default_factory=list)
    duplicate_scorers: List[int] = field(default_factory=list)


def build_scorer_record(entry: FeedEntry, *, competition: str) -> PlayerRecord:
    return PlayerRecord(
        player_id=entry.player_id,
        name=entry.name,
        photo=entry.photo,
        team=entry.team,
        competition=competition,
        position=entry.position,
        goals=entry.goals or 0,
        assists=entry.assists or 0,
        appearances=entry.appearances or 0,
        rating=entry.rating,
    )


def apply_assist_overlay(records: Dict[int, PlayerRecord], entry: FeedEntry) -> bool:
    """Fold one assist-feed entry into ``records``; return False if it was dropped.

    The join is anchored on the scorer feed: players missing from it are not
    added. A falsy assist count keeps the scorer-derived value.
    """

    existing = records.get(entry.player_id)
    if existing is None:
        return False
    if entry.assists:
        records[entry.player_id] = existing.model_copy(update={"assists": entry.assists})
    return True


def _describe(raw: Any, exc: Exception) -> str:
    player_id = None
    if isinstance(raw, dict) and isinstance(raw.get("player"), dict):
        player_id = raw["player"].get("id")
    return f"player={player_id!r}: {exc}"


def merge_feeds(
    scorers: Sequence[Any],
    assists: Sequence[Any],
    *,
    competition: str,
) -> Tuple[Dict[int, PlayerRecord], MergeReport]:
    records: Dict[int, PlayerRecord] = {}
    skipped: List[str] = []
    duplicates: List[int] = []
    dropped: List[int] = []

    for raw in scorers:
        try:
            entry = FeedEntry.from_raw(raw)
            if entry.player_id in records:
                duplicates.append(entry.player_id)
                continue
            records[entry.player_id] = build_scorer_record(entry, competition=competition)
        except (MalformedEntryError, ValidationError) as exc:
            skipped.append(_describe(raw, exc))

    for raw in assists:
        try:
            entry = FeedEntry.from_raw(raw)
            if not apply_assist_overlay(records, entry):
                dropped.append(entry.player_id)
        except (MalformedEntryError, ValidationError) as exc:
            skipped.append(_describe(raw, exc))

    if skipped:
        logger.warning("Skipped %s malformed feed entries for %s", len(skipped), competition)
    if dropped:
        logger.debug("Dropped %s assist-only players for %s", len(dropped), competition)

    report = MergeReport(
        competition=competition,
        scorer_entries=len(scorers),
        assist_entries=len(assists),
        merged_players=len(records),
        skipped_entries=skipped,
        dropped_assist_only=dropped,
        duplicate_scorers=duplicates,
    )
    return records, report


def merge_competition_feeds(feeds: CompetitionFeeds) -> Tuple[Dict[int, PlayerRecord], MergeReport]:
    return merge_feeds(feeds.scorers, feeds.assists, competition=feeds.competition.label)
