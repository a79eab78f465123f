"""REST API and card UI for the combined goals + assists leaderboard."""

from __future__ import annotations

from datetime import timezone
from html import escape
from typing import Sequence

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from ynwa_stats.aggregate import LeaderboardResult, LeaderboardService
from ynwa_stats.api.schemas import (
    CompetitionReportResponse,
    ConfigurationErrorResponse,
    LeaderboardPlayerResponse,
    LeaderboardResponse,
)
from ynwa_stats.config import StatsSettings
from ynwa_stats.errors import ConfigurationError
from ynwa_stats.feeds import FeedSource
from ynwa_stats.ingest import MergeReport
from ynwa_stats.models import LeaderboardSnapshot
from ynwa_stats.persistence import SnapshotCache, build_cache
from ynwa_stats.presentation import calculate_trend, export_leaderboard_to_csv


def _report_to_response(report: MergeReport) -> CompetitionReportResponse:
    return CompetitionReportResponse(
        competition=report.competition,
        scorer_entries=report.scorer_entries,
        assist_entries=report.assist_entries,
        merged_players=report.merged_players,
        skipped_entries=len(report.skipped_entries),
        dropped_assist_only=len(report.dropped_assist_only),
    )


def _snapshot_players(snapshot: LeaderboardSnapshot) -> list[LeaderboardPlayerResponse]:
    players: list[LeaderboardPlayerResponse] = []
    for rank, player in enumerate(snapshot.players, start=1):
        trend = calculate_trend(player)
        players.append(
            LeaderboardPlayerResponse(
                rank=rank,
                player_id=player.player_id,
                name=player.name,
                photo=player.photo,
                team=player.team,
                competition=player.competition,
                position=player.position,
                goals=player.goals,
                assists=player.assists,
                appearances=player.appearances,
                rating=player.rating,
                combined_score=player.combined_score,
                per_game_rate=player.per_game_rate,
                trend_direction=trend.direction,
                trend_percentage=trend.percentage,
            )
        )
    return players


def result_to_response(result: LeaderboardResult) -> LeaderboardResponse:
    snapshot = result.snapshot
    return LeaderboardResponse(
        created_at=snapshot.created_at,
        age_seconds=max(0.0, snapshot.age().total_seconds()),
        from_cache=result.from_cache,
        players=_snapshot_players(snapshot),
        reports=[_report_to_response(report) for report in result.reports],
    )


def _configuration_http_error(exc: ConfigurationError) -> HTTPException:
    detail = ConfigurationErrorResponse(message=exc.message, remedy=exc.remedy)
    return HTTPException(status_code=503, detail=detail.model_dump())


def _render_page(body: str) -> str:
    return f"""<!DOCTYPE html>
<html lang=\"en\">
<head>
    <meta charset=\"utf-8\">
    <title>YNWA Stats</title>
    <style>
        body {{ font-family: Arial, sans-serif; margin: 2rem; background: #f5f7fa; }}
        main {{ background: #fff; padding: 2rem; border-radius: 12px; box-shadow: 0 2px 6px rgba(0,0,0,0.08); }}
        nav a {{ margin-right: 1rem; color: #2563eb; text-decoration: none; }}
        button {{ padding: 0.6rem 1.2rem; border-radius: 6px; border: none; background: #ffd60a; color: #1b4332; font-weight: 700; cursor: pointer; }}
        .player-grid {{ display: grid; grid-template-columns: repeat(auto-fill, minmax(260px, 1fr)); gap: 1rem; margin-top: 1rem; }}
        .player-card {{ border: 1px solid #e2e8f0; border-radius: 12px; padding: 1rem; background: #f8fafc; }}
        .player-name {{ font-weight: 700; font-size: 1.1rem; }}
        .player-position {{ color: #475569; margin-bottom: 0.5rem; }}
        .stat-row {{ display: flex; justify-content: space-between; padding: 0.25rem 0; border-bottom: 1px solid #e2e8f0; }}
        .trend-badge {{ font-size: 0.8rem; margin-left: 0.25rem; color: #047857; }}
        .last-updated {{ text-align: center; padding: 1rem; color: #64748b; font-size: 0.9rem; }}
        .notice {{ margin: 0.5rem 0; padding: 1.5rem; border-radius: 12px; text-align: center; }}
        .notice.warning {{ background: #fff3cd; color: #856404; border: 2px solid #ffc107; }}
        .notice.error {{ background: #f8d7da; color: #721c24; border: 2px solid #dc3545; }}
    </style>
</head>
<body>
    <nav><a href=\"/ui\">Leaderboard</a><a href=\"/leaderboard.csv\">CSV</a></nav>
    <main>{body}</main>
</body>
</html>"""


def _render_card(player: LeaderboardPlayerResponse) -> str:
    position = escape(player.position or "-")
    return f"""
        <div class=\"player-card\">
            <div class=\"player-name\">{escape(player.name)}</div>
            <div class=\"player-position\">{position} &bull; {escape(player.team)}</div>
            <div class=\"stat-row\"><span>Goals This Season</span><span>{player.goals} <span class=\"trend-badge\">&uarr; {player.trend_percentage}%</span></span></div>
            <div class=\"stat-row\"><span>Assists This Season</span><span>{player.assists}</span></div>
            <div class=\"stat-row\"><span>Goals + Assists</span><span>{player.combined_score}</span></div>
            <div class=\"stat-row\"><span>Goals per Game</span><span>{player.per_game_rate:.2f}</span></div>
            <div class=\"stat-row\"><span>League</span><span>{escape(player.competition)}</span></div>
        </div>"""


def _render_leaderboard_page(response: LeaderboardResponse, competition_labels: Sequence[str]) -> str:
    if response.players:
        cards = "".join(_render_card(player) for player in response.players)
    else:
        cards = "<p>No players available right now.</p>"
    updated = response.created_at.astimezone(timezone.utc).strftime("%Y-%m-%d at %H:%M UTC")
    sources = " &amp; ".join(escape(label) for label in competition_labels)
    return f"""
        <h1>Top Players</h1>
        <form method=\"post\" action=\"/ui/refresh\"><button type=\"submit\">Refresh Stats</button></form>
        <div class=\"player-grid\">{cards}</div>
        <div class=\"last-updated\">
            <strong>Last Updated:</strong> {updated}
            <br><small>Stats refresh daily &bull; Data from {sources}</small>
        </div>"""


def _render_configuration_notice(exc: ConfigurationError) -> str:
    remedy = f"<p><small>{escape(exc.remedy)}</small></p>" if exc.remedy else ""
    return f"""
        <div class=\"notice warning\">
            <h3>API Key Required</h3>
            <p>{escape(exc.message)}</p>
            {remedy}
        </div>"""


def create_app(
    settings: StatsSettings | None = None,
    *,
    cache: SnapshotCache | None = None,
    feed_source: FeedSource | None = None,
) -> FastAPI:
    settings = settings or StatsSettings.from_env()
    if cache is None:
        cache = build_cache(settings.cache_path, settings.cache_max_age)
    service = LeaderboardService(settings, cache, feed_source=feed_source)

    app = FastAPI(title="ynwa stats")
    app.state.settings = settings
    app.state.service = service
    competition_labels = [competition.label for competition in settings.competitions]

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/leaderboard", response_model=LeaderboardResponse)
    async def leaderboard() -> LeaderboardResponse:
        try:
            result = await service.get_leaderboard()
        except ConfigurationError as exc:
            raise _configuration_http_error(exc) from exc
        return result_to_response(result)

    @app.post("/refresh", response_model=LeaderboardResponse)
    async def refresh() -> LeaderboardResponse:
        try:
            result = await service.refresh()
        except ConfigurationError as exc:
            raise _configuration_http_error(exc) from exc
        return result_to_response(result)

    @app.get("/leaderboard.csv")
    async def leaderboard_csv():
        try:
            result = await service.get_leaderboard()
        except ConfigurationError as exc:
            raise _configuration_http_error(exc) from exc
        return Response(
            content=export_leaderboard_to_csv(result.snapshot),
            media_type="text/csv",
            headers={"Content-Disposition": "attachment; filename=leaderboard.csv"},
        )

    @app.get("/ui", response_class=HTMLResponse)
    async def ui_index():
        try:
            result = await service.get_leaderboard()
        except ConfigurationError as exc:
            return HTMLResponse(_render_page(_render_configuration_notice(exc)), status_code=503)
        body = _render_leaderboard_page(result_to_response(result), competition_labels)
        return HTMLResponse(_render_page(body))

    @app.post("/ui/refresh")
    async def ui_refresh():
        try:
            await service.refresh()
        except ConfigurationError as exc:
            return HTMLResponse(_render_page(_render_configuration_notice(exc)), status_code=503)
        return RedirectResponse(url="/ui", status_code=303)

    return app


__all__ = ["create_app", "result_to_response"]
