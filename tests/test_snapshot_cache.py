import sqlite3
from datetime import timedelta

import pytest

from ynwa_stats.models import PlayerRecord
from ynwa_stats.persistence import MemorySnapshotCache, SqliteSnapshotCache, build_cache

from tests.feed_samples import FakeClock


def _players() -> list[PlayerRecord]:
    return [
        PlayerRecord(player_id=1, name="Mohamed Salah", goals=18, assists=13, appearances=29).with_derived(),
        PlayerRecord(player_id=2, name="Erling Haaland", goals=21, assists=3, appearances=28).with_derived(),
    ]


@pytest.fixture(params=["memory", "sqlite"])
def cache_and_clock(request, tmp_path):
    clock = FakeClock()
    if request.param == "memory":
        return MemorySnapshotCache(timedelta(hours=24), clock=clock), clock
    return SqliteSnapshotCache(tmp_path / "cache.sqlite", timedelta(hours=24), clock=clock), clock


def test_get_after_put_returns_snapshot(cache_and_clock):
    cache, clock = cache_and_clock
    stored = cache.put(_players())

    loaded = cache.get()

    assert loaded == stored
    assert [player.player_id for player in loaded.players] == [1, 2]
    assert loaded.created_at == clock.now


def test_get_expires_after_max_age(cache_and_clock):
    cache, clock = cache_and_clock
    cache.put(_players())

    clock.advance(hours=23, minutes=59)
    assert cache.get() is not None
    clock.advance(minutes=1)
    assert cache.get() is None


def test_invalidate_always_clears(cache_and_clock):
    cache, _ = cache_and_clock
    cache.put(_players())

    cache.invalidate()

    assert cache.get() is None


def test_empty_cache_misses(cache_and_clock):
    cache, _ = cache_and_clock

    assert cache.get() is None


def test_put_replaces_previous_snapshot(cache_and_clock):
    cache, clock = cache_and_clock
    cache.put(_players())
    clock.advance(hours=1)

    cache.put(_players()[:1])

    loaded = cache.get()
    assert len(loaded.players) == 1
    assert loaded.created_at == clock.now


def test_sqlite_snapshot_survives_new_instance(tmp_path):
    clock = FakeClock()
    path = tmp_path / "cache.sqlite"
    SqliteSnapshotCache(path, clock=clock).put(_players())

    reopened = SqliteSnapshotCache(path, clock=clock)

    assert reopened.get().players[1].name == "Erling Haaland"


def test_sqlite_corrupt_row_is_a_miss(tmp_path):
    path = tmp_path / "cache.sqlite"
    cache = SqliteSnapshotCache(path, clock=FakeClock())
    cache.put(_players())
    with sqlite3.connect(path) as conn:
        conn.execute("UPDATE leaderboard_snapshot SET players_json = '{not json'")

    assert cache.get() is None


def test_sqlite_corrupt_file_is_a_miss(tmp_path):
    path = tmp_path / "cache.sqlite"
    path.write_bytes(b"definitely not a sqlite database" * 64)
    cache = SqliteSnapshotCache(path, clock=FakeClock())

    assert cache.get() is None
    snapshot = cache.put(_players())
    assert len(snapshot.players) == 2


def test_build_cache_selects_backend(tmp_path):
    assert isinstance(build_cache(None), MemorySnapshotCache)
    assert isinstance(build_cache(tmp_path / "c.sqlite"), SqliteSnapshotCache)
