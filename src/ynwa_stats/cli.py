"""Command-line interface for building and printing the leaderboard."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import timedelta
from pathlib import Path

from ynwa_stats.aggregate import LeaderboardResult, LeaderboardService
from ynwa_stats.config import StatsSettings, iter_competitions, parse_competitions
from ynwa_stats.config_loader import SettingsProfile
from ynwa_stats.errors import ConfigurationError
from ynwa_stats.persistence import build_cache
from ynwa_stats.presentation import calculate_trend, export_leaderboard_to_csv


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    known = ", ".join(f"{comp.competition_id}={comp.label}" for comp in iter_competitions())
    parser = argparse.ArgumentParser(description="Rank players by goals + assists across competitions")
    parser.add_argument("--refresh", action="store_true", help="Ignore any cached snapshot and refetch")
    parser.add_argument(
        "--format",
        choices=("table", "json", "csv"),
        default="table",
        help="Output format",
    )
    parser.add_argument("--output", type=Path, default=None, help="Write output to a file instead of stdout")
    parser.add_argument(
        "--competition",
        action="append",
        default=[],
        help=f"Competition to include as ID or ID=LABEL (repeatable, order sets priority). Known: {known}",
    )
    parser.add_argument("--season", type=int, default=None, help="Season year (e.g., 2025)")
    parser.add_argument("--limit", type=int, default=None, help="Leaderboard size")
    parser.add_argument("--cache-hours", type=float, default=None, help="Maximum snapshot age in hours")
    parser.add_argument("--cache", type=Path, default=None, help="SQLite file used to keep the snapshot")
    parser.add_argument("--load-profile", type=Path, default=None, help="Load settings profile JSON")
    parser.add_argument("--save-profile", type=Path, default=None, help="Save settings profile JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")
    return parser.parse_args(argv)


def _resolve_settings(args: argparse.Namespace) -> StatsSettings:
    settings = StatsSettings.from_env()
    if args.load_profile:
        settings = SettingsProfile.load(args.load_profile).apply(settings)
    competitions = parse_competitions(args.competition) if args.competition else None
    settings = settings.with_overrides(
        competitions=competitions or None,
        season=args.season,
        leaderboard_size=args.limit,
        cache_max_age=timedelta(hours=args.cache_hours) if args.cache_hours is not None else None,
        cache_path=args.cache,
    )
    if settings.leaderboard_size < 0:
        raise ValueError(f"leaderboard size must be non-negative, got {settings.leaderboard_size}")
    return settings


def _format_table(result: LeaderboardResult) -> str:
    header = f"{'#':>3}  {'Player':<28} {'Team':<22} {'G':>3} {'A':>3} {'G+A':>4} {'G/Gm':>5}  Trend"
    lines = [header, "-" * len(header)]
    for rank, player in enumerate(result.snapshot.players, start=1):
        trend = calculate_trend(player)
        lines.append(
            f"{rank:>3}  {player.name[:28]:<28} {player.team[:22]:<22} {player.goals:>3} {player.assists:>3} "
            f"{player.combined_score:>4} {player.per_game_rate:>5.2f}  +{trend.percentage}%"
        )
    source = "cache" if result.from_cache else "live feeds"
    created = result.snapshot.created_at.astimezone().strftime("%Y-%m-%d %H:%M")
    lines.append(f"Last updated {created} ({source})")
    return "\n".join(lines) + "\n"


def _format_json(result: LeaderboardResult) -> str:
    payload = {
        "created_at": result.snapshot.created_at.isoformat(),
        "from_cache": result.from_cache,
        "players": [player.model_dump(mode="json") for player in result.snapshot.players],
    }
    return json.dumps(payload, indent=2) + "\n"


def _render(result: LeaderboardResult, fmt: str) -> str:
    if fmt == "json":
        return _format_json(result)
    if fmt == "csv":
        return export_leaderboard_to_csv(result.snapshot)
    return _format_table(result)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = _resolve_settings(args)
    except (ConfigurationError, OSError, ValueError) as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2

    if args.save_profile:
        SettingsProfile.from_settings(settings).save(args.save_profile)
        print(f"Saved settings profile to {args.save_profile}", file=sys.stderr)

    cache = build_cache(settings.cache_path, settings.cache_max_age)
    service = LeaderboardService(settings, cache)

    try:
        if args.refresh:
            result = asyncio.run(service.refresh())
        else:
            result = asyncio.run(service.get_leaderboard())
    except ConfigurationError as exc:
        print(f"Configuration error: {exc.message}", file=sys.stderr)
        if exc.remedy:
            print(exc.remedy, file=sys.stderr)
        return 2

    for report in result.reports:
        if report.skipped_entries:
            print(
                f"{report.competition}: skipped {len(report.skipped_entries)} malformed entries",
                file=sys.stderr,
            )

    output = _render(result, args.format)
    if args.output:
        args.output.write_text(output, encoding="utf-8")
        print(f"Wrote leaderboard to {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
