import json

import pytest

from ynwa_stats import cli
from ynwa_stats.models import PlayerRecord
from ynwa_stats.persistence import SqliteSnapshotCache


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "API_FOOTBALL_KEY",
        "YNWA_SEASON",
        "YNWA_CACHE_HOURS",
        "YNWA_LEADERBOARD_SIZE",
        "YNWA_COMPETITIONS",
        "YNWA_CACHE_PATH",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def warm_cache(tmp_path):
    path = tmp_path / "snapshot.sqlite"
    SqliteSnapshotCache(path).put(
        [
            PlayerRecord(player_id=306, name="Mohamed Salah", team="Liverpool", goals=18, assists=13, appearances=29).with_derived(),
            PlayerRecord(player_id=1100, name="Erling Haaland", team="Manchester City", goals=21, assists=3, appearances=28).with_derived(),
        ]
    )
    return path


def test_missing_key_exits_with_remedy(capsys):
    code = cli.main(["--format", "json"])

    assert code == 2
    err = capsys.readouterr().err
    assert "Configuration error" in err
    assert "API_FOOTBALL_KEY" in err


def test_warm_cache_is_served_without_key(warm_cache, capsys):
    code = cli.main(["--cache", str(warm_cache), "--format", "json"])

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["from_cache"] is True
    assert [player["player_id"] for player in payload["players"]] == [306, 1100]


def test_table_output(warm_cache, capsys):
    assert cli.main(["--cache", str(warm_cache)]) == 0

    out = capsys.readouterr().out
    assert "Mohamed Salah" in out
    assert "(cache)" in out


def test_csv_written_to_file(warm_cache, tmp_path):
    output = tmp_path / "leaderboard.csv"

    assert cli.main(["--cache", str(warm_cache), "--format", "csv", "--output", str(output)]) == 0

    lines = output.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("rank,player_id")
    assert lines[2].startswith("2,1100,Erling Haaland")


def test_refresh_without_key_fails_even_with_warm_cache(warm_cache):
    assert cli.main(["--cache", str(warm_cache), "--refresh"]) == 2
    assert cli.main(["--cache", str(warm_cache)]) == 0


def test_save_profile(warm_cache, tmp_path):
    profile = tmp_path / "profile.json"

    code = cli.main(
        ["--cache", str(warm_cache), "--competition", "78", "--competition", "39=EPL", "--season", "2024", "--save-profile", str(profile)]
    )

    assert code == 0
    data = json.loads(profile.read_text(encoding="utf-8"))
    assert data["competitions"] == {"78": "Bundesliga", "39": "EPL"}
    assert data["season"] == 2024


def test_negative_leaderboard_size_in_profile_is_rejected(tmp_path, capsys):
    profile = tmp_path / "profile.json"
    profile.write_text(json.dumps({"leaderboard_size": -1}), encoding="utf-8")

    code = cli.main(["--load-profile", str(profile)])

    assert code == 2
    assert "non-negative" in capsys.readouterr().err


def test_missing_profile_is_reported(tmp_path, capsys):
    code = cli.main(["--load-profile", str(tmp_path / "absent.json")])

    assert code == 2
    assert "Invalid configuration" in capsys.readouterr().err


def test_help_lists_known_competitions(capsys):
    with pytest.raises(SystemExit):
        cli.main(["--help"])

    assert "Bundesliga" in capsys.readouterr().out
