"""Snapshot cache holding the single most recent leaderboard."""

from __future__ import annotations

import json
import logging
import sqlite3
import threading
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, Iterable, Optional, Protocol

from pydantic import ValidationError

from ynwa_stats.models import LeaderboardSnapshot, PlayerRecord, utc_now


logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

DEFAULT_MAX_AGE = timedelta(hours=24)


class SnapshotCache(Protocol):
    max_age: timedelta

    def get(self) -> Optional[LeaderboardSnapshot]:
        ...

    def put(self, players: Iterable[PlayerRecord]) -> LeaderboardSnapshot:
        ...

    def invalidate(self) -> None:
        ...


class MemorySnapshotCache:
    """In-process cache: empty, then populated, invalidated and repopulated."""

    def __init__(self, max_age: timedelta = DEFAULT_MAX_AGE, *, clock: Clock = utc_now):
        self.max_age = max_age
        self._clock = clock
        self._lock = threading.Lock()
        self._snapshot: Optional[LeaderboardSnapshot] = None

    def get(self) -> Optional[LeaderboardSnapshot]:
        with self._lock:
            snapshot = self._snapshot
        if snapshot is None:
            return None
        if not snapshot.is_fresh(self.max_age, self._clock()):
            return None
        return snapshot

    def put(self, players: Iterable[PlayerRecord]) -> LeaderboardSnapshot:
        snapshot = LeaderboardSnapshot(players=tuple(players), created_at=self._clock())
        with self._lock:
            self._snapshot = snapshot
        return snapshot

    def invalidate(self) -> None:
        with self._lock:
            self._snapshot = None


class SqliteSnapshotCache:
    """SQLite-backed cache that keeps one snapshot row across restarts.

    Unreadable or corrupt rows are reported as a miss rather than raised.
    """

    def __init__(
        self,
        db_path: Path | str,
        max_age: timedelta = DEFAULT_MAX_AGE,
        *,
        clock: Clock = utc_now,
    ):
        self.db_path = Path(db_path)
        self.max_age = max_age
        self._clock = clock
        self._lock = threading.Lock()

    def _connect(self) -> sqlite3.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS leaderboard_snapshot (
                    id INTEGER PRIMARY KEY CHECK (id = 1),
                    created_at TEXT NOT NULL,
                    players_json TEXT NOT NULL
                )
                """
            )
        except sqlite3.Error:
            conn.close()
            raise
        return conn

    def _read(self) -> Optional[LeaderboardSnapshot]:
        conn = self._connect()
        try:
            row = conn.execute(
                "SELECT created_at, players_json FROM leaderboard_snapshot WHERE id = 1"
            ).fetchone()
        finally:
            conn.close()
        if row is None:
            return None
        return LeaderboardSnapshot(
            players=tuple(PlayerRecord.model_validate(item) for item in json.loads(row["players_json"])),
            created_at=datetime.fromisoformat(row["created_at"]),
        )

    def get(self) -> Optional[LeaderboardSnapshot]:
        with self._lock:
            try:
                snapshot = self._read()
            except (sqlite3.Error, OSError, ValueError, TypeError, ValidationError) as exc:
                logger.warning("Ignoring unreadable snapshot cache at %s: %s", self.db_path, exc)
                return None
        if snapshot is None or not snapshot.is_fresh(self.max_age, self._clock()):
            return None
        return snapshot

    def put(self, players: Iterable[PlayerRecord]) -> LeaderboardSnapshot:
        snapshot = LeaderboardSnapshot(players=tuple(players), created_at=self._clock())
        payload = json.dumps([player.model_dump(mode="json") for player in snapshot.players])
        with self._lock:
            try:
                conn = self._connect()
                try:
                    with conn:
                        conn.execute(
                            "INSERT OR REPLACE INTO leaderboard_snapshot (id, created_at, players_json) VALUES (1, ?, ?)",
                            (snapshot.created_at.isoformat(), payload),
                        )
                finally:
                    conn.close()
            except (sqlite3.Error, OSError) as exc:
                logger.warning("Error saving snapshot cache to %s: %s", self.db_path, exc)
        return snapshot

    def invalidate(self) -> None:
        with self._lock:
            try:
                conn = self._connect()
                try:
                    with conn:
                        conn.execute("DELETE FROM leaderboard_snapshot")
                finally:
                    conn.close()
            except (sqlite3.Error, OSError) as exc:
                logger.warning("Error clearing snapshot cache at %s: %s", self.db_path, exc)


def build_cache(
    cache_path: Path | str | None,
    max_age: timedelta = DEFAULT_MAX_AGE,
    *,
    clock: Clock = utc_now,
) -> SnapshotCache:
    if cache_path:
        return SqliteSnapshotCache(cache_path, max_age, clock=clock)
    return MemorySnapshotCache(max_age, clock=clock)


__all__ = [
    "DEFAULT_MAX_AGE",
    "MemorySnapshotCache",
    "SnapshotCache",
    "SqliteSnapshotCache",
    "build_cache",
]
