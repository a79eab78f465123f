"""Lightweight REST client for the ynwa-stats API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def _print_leaderboard(payload: dict) -> None:
    source = "cache" if payload.get("from_cache") else "live feeds"
    print(f"Snapshot {payload['created_at']} ({source}, age {payload['age_seconds']:.0f}s)")
    for player in payload["players"]:
        print(
            f"{player['rank']:>3}. {player['name']} ({player['team']}) "
            f"G={player['goals']} A={player['assists']} G+A={player['combined_score']}"
        )
    for report in payload.get("reports", []):
        print(
            f"  {report['competition']}: {report['merged_players']} players, "
            f"{report['skipped_entries']} skipped, {report['dropped_assist_only']} assist-only dropped"
        )


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the ynwa-stats REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("--refresh", action="store_true", help="Invalidate the cache and rebuild the leaderboard")
    parser.add_argument("--json", action="store_true", help="Print the raw JSON payload")
    parser.add_argument("--export-path", type=Path, help="Download the leaderboard CSV to this path")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url, timeout=60.0) as client:
        if args.export_path:
            resp = client.get("/leaderboard.csv")
            resp.raise_for_status()
            args.export_path.write_text(resp.text)
            print(f"CSV export saved to {args.export_path}")
            return

        resp = client.post("/refresh") if args.refresh else client.get("/leaderboard")
        if resp.status_code == 503:
            detail = resp.json().get("detail", {})
            message = detail.get("message", "service not configured")
            remedy = detail.get("remedy")
            raise SystemExit(f"{message}. {remedy}" if remedy else message)
        resp.raise_for_status()
        payload = resp.json()

    if args.json:
        print(json.dumps(payload, indent=2))
    else:
        _print_leaderboard(payload)


if __name__ == "__main__":
    main()
