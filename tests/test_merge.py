from ynwa_stats.feeds import FeedEntry
from ynwa_stats.ingest import apply_assist_overlay, build_scorer_record, merge_feeds

from tests.feed_samples import entry


def test_merge_end_to_end_example():
    scorers = [entry(1, goals=10, assists=2), entry(2, goals=8, assists=1)]
    assists = [entry(1, assists=5), entry(3, assists=9)]

    records, report = merge_feeds(scorers, assists, competition="Premier League")

    assert list(records) == [1, 2]
    assert (records[1].goals, records[1].assists) == (10, 5)
    assert (records[2].goals, records[2].assists) == (8, 1)
    assert report.dropped_assist_only == [3]
    assert report.merged_players == 2


def test_assist_only_players_never_enter_mapping():
    scorers = [entry(1, goals=3), entry(2, goals=2)]
    assists = [entry(10, assists=7), entry(11, assists=6)]

    records, _ = merge_feeds(scorers, assists, competition="La Liga")

    assert set(records) == {1, 2}


def test_zero_or_missing_assist_value_keeps_scorer_assists():
    scorers = [entry(1, goals=5, assists=4), entry(2, goals=5, assists=3)]
    assists = [entry(1, assists=0), entry(2, assists=None)]

    records, report = merge_feeds(scorers, assists, competition="Premier League")

    assert records[1].assists == 4
    assert records[2].assists == 3
    assert report.dropped_assist_only == []


def test_duplicate_scorer_entries_keep_first_occurrence():
    scorers = [entry(1, goals=9, team="Liverpool"), entry(1, goals=1, team="Everton")]

    records, report = merge_feeds(scorers, [], competition="Premier League")

    assert records[1].goals == 9
    assert records[1].team == "Liverpool"
    assert report.duplicate_scorers == [1]


def test_malformed_entries_are_skipped_without_aborting():
    scorers = [entry(1, goals=4), {"player": {"name": "No Id"}, "statistics": [{}]}, entry(2, goals=-3), entry(3, goals=2)]
    assists = [{"player": {"id": 1}}, entry(3, assists=6)]

    records, report = merge_feeds(scorers, assists, competition="Premier League")

    assert set(records) == {1, 3}
    assert records[3].assists == 6
    assert len(report.skipped_entries) == 3


def test_scorer_record_defaults_missing_counts_and_sets_competition():
    record = build_scorer_record(FeedEntry.from_raw(entry(7, rating="6.5")), competition="La Liga")

    assert (record.goals, record.assists, record.appearances) == (0, 0, 0)
    assert record.competition == "La Liga"
    assert record.rating == 6.5


def test_apply_assist_overlay_reports_drop():
    records = {}

    assert apply_assist_overlay(records, FeedEntry.from_raw(entry(99, assists=3))) is False
    assert records == {}
