import pytest
from httpx import ASGITransport, AsyncClient

from ynwa_stats.api import create_app
from ynwa_stats.config import StatsSettings
from ynwa_stats.persistence import MemorySnapshotCache

from tests.feed_samples import LA_LIGA, PREMIER_LEAGUE, FakeFeedSource, entry


def _source() -> FakeFeedSource:
    return FakeFeedSource(
        {
            39: (
                [
                    entry(306, name="Mohamed Salah", goals=18, assists=6, appearances=20, team="Liverpool"),
                    entry(1100, name="Erling Haaland", goals=21, assists=1, appearances=25, team="Manchester City"),
                ],
                [entry(306, assists=13)],
            ),
            140: ([entry(874, name="<Kylian>", goals=15, assists=2, appearances=30, team="Real Madrid")], []),
        }
    )


@pytest.fixture
async def client():
    settings = StatsSettings(competitions=(PREMIER_LEAGUE, LA_LIGA), api_key="super-secret")
    app = create_app(settings, cache=MemorySnapshotCache(), feed_source=_source())
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        async_client.app = app
        yield async_client


@pytest.fixture
async def unconfigured_client():
    app = create_app(StatsSettings(api_key=None), cache=MemorySnapshotCache())
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client


@pytest.mark.anyio
async def test_health(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


@pytest.mark.anyio
async def test_leaderboard_endpoint(client: AsyncClient):
    resp = await client.get("/leaderboard")
    assert resp.status_code == 200
    payload = resp.json()
    assert payload["from_cache"] is False
    assert [player["player_id"] for player in payload["players"]] == [306, 1100, 874]
    salah = payload["players"][0]
    assert salah["rank"] == 1
    assert salah["assists"] == 13
    assert salah["combined_score"] == 31
    assert salah["per_game_rate"] == pytest.approx(0.9)
    assert salah["trend_percentage"] == 25
    assert [report["competition"] for report in payload["reports"]] == ["Premier League", "La Liga"]

    resp = await client.get("/leaderboard")
    assert resp.json()["from_cache"] is True
    assert resp.json()["reports"] == []


@pytest.mark.anyio
async def test_refresh_endpoint_rebuilds(client: AsyncClient):
    await client.get("/leaderboard")
    resp = await client.post("/refresh")
    assert resp.status_code == 200
    assert resp.json()["from_cache"] is False
    assert client.app.state.service.cache.get() is not None


@pytest.mark.anyio
async def test_leaderboard_csv_export(client: AsyncClient):
    resp = await client.get("/leaderboard.csv")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    lines = resp.text.strip().splitlines()
    assert lines[0].startswith("rank,player_id,name")
    assert lines[1].startswith("1,306,Mohamed Salah")


@pytest.mark.anyio
async def test_ui_renders_cards(client: AsyncClient):
    resp = await client.get("/ui")
    assert resp.status_code == 200
    assert "Mohamed Salah" in resp.text
    assert "&lt;Kylian&gt;" in resp.text
    assert "Premier League &amp; La Liga" in resp.text


@pytest.mark.anyio
async def test_ui_refresh_redirects(client: AsyncClient):
    resp = await client.post("/ui/refresh")
    assert resp.status_code == 303
    assert resp.headers["location"] == "/ui"


@pytest.mark.anyio
async def test_configuration_error_is_distinct(unconfigured_client: AsyncClient):
    resp = await unconfigured_client.get("/leaderboard")
    assert resp.status_code == 503
    detail = resp.json()["detail"]
    assert detail["error"] == "configuration"
    assert "API_FOOTBALL_KEY" in detail["remedy"]

    resp = await unconfigured_client.get("/ui")
    assert resp.status_code == 503
    assert "API Key Required" in resp.text


@pytest.mark.anyio
async def test_api_key_never_returned(client: AsyncClient):
    for path in ("/leaderboard", "/leaderboard.csv", "/ui"):
        resp = await client.get(path)
        assert "super-secret" not in resp.text
