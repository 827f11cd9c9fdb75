import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from draftassist.api import create_app
from draftassist.config_loader import ProxySettings
from draftassist.upstream import ESPN_API_ROOT, FILTER_HEADER, UpstreamClient


LEAGUE_ID = 12345
SEASON = 2025


def _league_payload() -> dict:
    return {
        "settings": {
            "name": "Test League",
            "scoringSettings": {"scoringType": 0},
            "draftSettings": {"date": 1756000000000},
        },
        "teams": [
            {
                "id": 1,
                "location": "Gridiron",
                "nickname": "Giants",
                "primaryOwner": "{OWNER-1}",
                "record": {"overall": {"wins": 3, "losses": 1, "ties": 0, "pointsFor": 512.4}},
                "roster": {
                    "entries": [
                        {
                            "playerId": 1,
                            "lineupSlotId": 2,
                            "playerPoolEntry": {"player": {"fullName": "Alpha Back", "defaultPositionId": 2}},
                        }
                    ]
                },
            },
            {"id": 2, "name": "Second Team", "primaryOwner": "{OWNER-2}"},
        ],
    }


def _draft_payload() -> dict:
    return {
        "draftDetail": {
            "drafted": True,
            "picks": [
                {
                    "playerId": 1,
                    "teamId": 1,
                    "roundId": 1,
                    "roundPickNumber": 1,
                    "overallPickNumber": 1,
                    "playerPoolEntry": {
                        "player": {"fullName": "Alpha Back", "defaultPositionId": 2, "proTeamId": 12}
                    },
                },
                {"playerId": 2, "teamId": 2, "roundId": 1, "roundPickNumber": 2, "overallPickNumber": 2},
            ],
        }
    }


def _league_players() -> dict:
    return {
        "players": [
            {
                "id": 1,
                "onTeamId": 1,
                "status": "ONTEAM",
                "player": {
                    "id": 1,
                    "fullName": "Alpha Back",
                    "proTeamId": 12,
                    "defaultPositionId": 2,
                    "eligibleSlots": [2, 23, 20],
                    "ownership": {"averageDraftPosition": 12.5, "percentOwned": 99.1, "percentStarted": 90.0},
                    "stats": [{"seasonId": SEASON, "statSourceId": 1, "appliedTotal": 250.4}],
                },
            },
            {
                "id": 2,
                "status": "FREEAGENT",
                "player": {
                    "id": 2,
                    "fullName": "Bravo Catcher",
                    "proTeamId": 7,
                    "defaultPositionId": 3,
                    "ownership": {"averageDraftPosition": 30.0, "percentOwned": 95.0},
                },
            },
            {
                "id": 3,
                "player": {
                    "id": 3,
                    "fullName": "Coach Clipboard",
                    "proTeamId": 7,
                    "defaultPositionId": 9,
                    "ownership": {"percentOwned": 50.0},
                },
            },
        ]
    }


def _public_players() -> list:
    return [
        {
            "id": 4,
            "fullName": "Delta Kicker",
            "proTeamId": 1,
            "defaultPositionId": 5,
            "ownership": {"percentOwned": 3.0},
        },
        {
            "id": 2,
            "fullName": "Bravo Duplicate",
            "proTeamId": 7,
            "defaultPositionId": 3,
            "ownership": {"averageDraftPosition": 31.0, "percentOwned": 94.0},
        },
    ]


class FakeESPN:
    """Routes proxied requests to canned ESPN payloads and records them."""

    def __init__(self, overrides: dict | None = None):
        self.requests: list[httpx.Request] = []
        self.overrides = overrides or {}

    def _route(self, request: httpx.Request) -> str:
        if request.url.path.endswith("/players"):
            return "public"
        view = request.url.params.get("view", "")
        if "kona_player_info" in view:
            return "league_players"
        if "mSettings" in view:
            return "connect"
        if "mDraftDetail" in view:
            return "draft"
        return "teams"

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self._route(request)
        if route in self.overrides:
            return self.overrides[route]
        payloads = {
            "connect": _league_payload(),
            "teams": _league_payload(),
            "draft": _draft_payload(),
            "league_players": _league_players(),
            "public": _public_players(),
        }
        return httpx.Response(200, json=payloads[route])

    def routes(self) -> list[str]:
        return [self._route(request) for request in self.requests]


def _make_client(espn: FakeESPN) -> AsyncClient:
    upstream = UpstreamClient(transport=httpx.MockTransport(espn))
    app = create_app(ProxySettings(), upstream=upstream)
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver")


@pytest.fixture
def espn() -> FakeESPN:
    return FakeESPN()


@pytest.fixture
async def client(espn: FakeESPN):
    async with _make_client(espn) as async_client:
        yield async_client


async def _connect(client: AsyncClient, **extra) -> httpx.Response:
    body = {"leagueId": LEAGUE_ID, "seasonId": SEASON, **extra}
    return await client.post("/api/connect", json=body)


@pytest.mark.anyio
async def test_health_before_connect(client: AsyncClient):
    resp = await client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {
        "status": "ok",
        "connected": False,
        "league": "Not connected",
        "apiUrl": ESPN_API_ROOT,
    }


@pytest.mark.anyio
async def test_connect_returns_league_summary(client: AsyncClient, espn: FakeESPN):
    resp = await _connect(client)
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    league = body["league"]
    assert league["name"] == "Test League"
    assert league["teams"] == 2
    assert league["scoringType"] == "Standard"
    assert league["leagueId"] == LEAGUE_ID
    assert [team["name"] for team in league["teamData"]] == ["Gridiron Giants", "Second Team"]

    request = espn.requests[0]
    assert request.url.path.endswith(f"/seasons/{SEASON}/segments/0/leagues/{LEAGUE_ID}")
    assert request.url.params["view"] == "mSettings,mTeam,mRoster"
    assert "cookie" not in request.headers

    health = (await client.get("/api/health")).json()
    assert health["connected"] is True
    assert health["league"] == LEAGUE_ID


@pytest.mark.anyio
async def test_connect_forwards_cookies_for_private_league(client: AsyncClient, espn: FakeESPN):
    resp = await _connect(client, espnS2="s2-token", swid="{SWID}")
    assert resp.status_code == 200
    assert espn.requests[0].headers["cookie"] == "espn_s2=s2-token; SWID={SWID}"


@pytest.mark.anyio
@pytest.mark.parametrize(
    "status, fragment, category",
    [
        (404, "League not found. Check your League ID.", "not_found"),
        (401, "Access denied. For private leagues, verify your ESPN_S2 and SWID cookies.", "unauthorized"),
        (503, "ESPN server error. Try again in a few minutes.", "server_error"),
        (429, "Check your League ID and credentials.", "other"),
    ],
)
async def test_connect_failure_messages(status: int, fragment: str, category: str):
    espn = FakeESPN({"connect": httpx.Response(status, json={"messages": ["nope"]})})
    async with _make_client(espn) as client:
        resp = await _connect(client)
        assert resp.status_code == 500
        body = resp.json()
        assert body["success"] is False
        assert body["error"] == f"Failed to connect to ESPN League {LEAGUE_ID}. {fragment}"
        assert body["category"] == category
        assert body["status"] == status

        health = (await client.get("/api/health")).json()
        assert health["connected"] is False


@pytest.mark.anyio
@pytest.mark.parametrize(
    "path",
    [
        f"/api/players/{SEASON}",
        f"/api/players/{SEASON}/quality",
        f"/api/players/{SEASON}/export.csv",
        f"/api/teams/{SEASON}",
        f"/api/draft/{SEASON}",
    ],
)
async def test_reads_require_connection(client: AsyncClient, espn: FakeESPN, path: str):
    resp = await client.get(path)
    assert resp.status_code == 400
    body = resp.json()
    assert body["error"] == "Must connect to league first"
    assert body["category"] == "not_connected"
    assert espn.requests == []


@pytest.mark.anyio
async def test_players_merges_sources_and_ranks(client: AsyncClient, espn: FakeESPN):
    await _connect(client, espnS2="s2-token", swid="{SWID}")
    resp = await client.get(f"/api/players/{SEASON}")
    assert resp.status_code == 200
    players = resp.json()

    assert [player["name"] for player in players] == ["Alpha Back", "Bravo Catcher", "Delta Kicker"]
    alpha, bravo, delta = players
    assert alpha["team"] == "KC"
    assert alpha["position"] == "RB"
    assert alpha["positionId"] == 2
    assert alpha["adp"] == pytest.approx(12.5)
    assert alpha["projectedPoints"] == pytest.approx(250.4)
    assert alpha["eligiblePositions"] == ["RB"]
    assert alpha["availabilityStatus"] == "ONTEAM"
    assert alpha["tier"] == "elite"
    assert alpha["hasRealADP"] is True
    assert alpha["hasRealProjections"] is True
    assert bravo["dataSource"] == "primary"
    assert bravo["tier"] == "starter"
    assert delta["dataSource"] == "fallback"
    assert delta["adp"] == pytest.approx(999)
    assert delta["hasRealADP"] is False
    assert delta["tier"] == "sleeper"

    assert espn.routes() == ["connect", "league_players", "public"]
    league_request, public_request = espn.requests[1], espn.requests[2]
    assert league_request.url.params["view"] == "kona_player_info"
    assert league_request.url.params["scoringPeriodId"] == "0"
    assert league_request.headers["cookie"] == "espn_s2=s2-token; SWID={SWID}"
    assert '"limit": 2000' in league_request.headers[FILTER_HEADER]
    assert "cookie" not in public_request.headers


@pytest.mark.anyio
async def test_players_survive_failed_primary_source():
    espn = FakeESPN({"league_players": httpx.Response(500, text="boom")})
    async with _make_client(espn) as client:
        await _connect(client)
        resp = await client.get(f"/api/players/{SEASON}")
        assert resp.status_code == 200
        names = [player["name"] for player in resp.json()]
        assert names == ["Bravo Duplicate", "Delta Kicker"]
        assert all(player["dataSource"] == "fallback" for player in resp.json())


@pytest.mark.anyio
async def test_players_fail_when_every_source_fails():
    espn = FakeESPN(
        {
            "league_players": httpx.Response(500, text="boom"),
            "public": httpx.Response(503, text="down"),
        }
    )
    async with _make_client(espn) as client:
        await _connect(client)
        resp = await client.get(f"/api/players/{SEASON}")
        assert resp.status_code == 500
        body = resp.json()
        assert body["error"] == "Failed to fetch players from ESPN API"
        assert body["category"] == "no_data"
        assert "No players data retrieved" in body["details"]
        assert body["timestamp"]


@pytest.mark.anyio
async def test_player_quality_report(client: AsyncClient):
    await _connect(client)
    resp = await client.get(f"/api/players/{SEASON}/quality")
    assert resp.status_code == 200
    body = resp.json()
    quality = body["dataQuality"]
    assert quality["totalPlayers"] == 3
    assert quality["playersWithRealADP"] == 2
    assert quality["playersWithRealProjections"] == 1
    assert quality["averageADP"] == pytest.approx(21.25)
    assert [source["status"] for source in body["sources"]] == ["ok", "ok"]
    assert body["sources"][1]["added"] == 1
    assert body["topPlayers"][0]["name"] == "Alpha Back"


@pytest.mark.anyio
async def test_players_export_csv(client: AsyncClient):
    await _connect(client)
    resp = await client.get(f"/api/players/{SEASON}/export.csv")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    lines = resp.text.strip().splitlines()
    assert lines[0].startswith("rank,id,name,team,position,adp")
    assert lines[1].startswith("1,1,Alpha Back,KC,RB,12.5")
    assert len(lines) == 4


@pytest.mark.anyio
async def test_teams_endpoint(client: AsyncClient):
    await _connect(client)
    resp = await client.get(f"/api/teams/{SEASON}")
    assert resp.status_code == 200
    teams = resp.json()
    assert [team["name"] for team in teams] == ["Gridiron Giants", "Second Team"]
    first = teams[0]
    assert first["owner"] == "{OWNER-1}"
    assert first["record"]["wins"] == 3
    assert first["record"]["pointsFor"] == pytest.approx(512.4)
    assert first["roster"] == [
        {"playerId": 1, "playerName": "Alpha Back", "position": "RB", "lineupSlotId": 2}
    ]
    assert teams[1]["record"] == {"wins": 0, "losses": 0, "ties": 0}


@pytest.mark.anyio
async def test_teams_upstream_failure():
    espn = FakeESPN({"teams": httpx.Response(502, text="bad gateway")})
    async with _make_client(espn) as client:
        await _connect(client)
        resp = await client.get(f"/api/teams/{SEASON}")
        assert resp.status_code == 500
        assert resp.json()["error"] == "Failed to fetch teams"
        assert resp.json()["category"] == "server_error"


@pytest.mark.anyio
async def test_draft_endpoint(client: AsyncClient, espn: FakeESPN):
    await _connect(client)
    resp = await client.get(f"/api/draft/{SEASON}")
    assert resp.status_code == 200
    draft = resp.json()
    assert draft["drafted"] is True
    first, second = draft["picks"]
    assert first["playerName"] == "Alpha Back"
    assert first["team"] == "KC"
    assert first["overallPickNumber"] == 1
    assert second["playerName"] == "Unknown"
    assert second["position"] == "Unknown"
    assert second["team"] == "FA"
    assert espn.requests[-1].url.params["view"] == "mDraftDetail"


@pytest.mark.anyio
async def test_draft_upstream_failure():
    espn = FakeESPN({"draft": httpx.Response(404, text="missing")})
    async with _make_client(espn) as client:
        await _connect(client)
        resp = await client.get(f"/api/draft/{SEASON}")
        assert resp.status_code == 500
        assert resp.json()["error"] == "Failed to fetch draft information"


@pytest.mark.anyio
async def test_debug_probe_without_connection(client: AsyncClient, espn: FakeESPN):
    resp = await client.get(f"/api/debug/{SEASON}")
    assert resp.status_code == 200
    body = resp.json()
    assert body["endpoints"][0]["status"] == "SUCCESS"
    assert body["endpoints"][0]["playerCount"] == 2
    assert body["endpoints"][0]["samplePlayer"] == "Delta Kicker"
    assert body["totalPlayers"] == 2
    assert body["positionBreakdown"] == {"K": 1, "WR": 1}
    assert body["samplePlayers"][0] == {"name": "Delta Kicker", "position": "K", "positionId": 5, "team": "ATL"}
    assert '"limit": 50' in espn.requests[0].headers[FILTER_HEADER]


@pytest.mark.anyio
async def test_debug_probe_reports_failure():
    espn = FakeESPN({"public": httpx.Response(500, text="boom")})
    async with _make_client(espn) as client:
        resp = await client.get(f"/api/debug/{SEASON}")
        assert resp.status_code == 200
        body = resp.json()
        assert body["endpoints"][0]["status"] == "FAILED"
        assert "500" in body["endpoints"][0]["error"]
        assert body["totalPlayers"] == 0


@pytest.mark.anyio
async def test_reconnect_replaces_league(client: AsyncClient, espn: FakeESPN):
    await _connect(client)
    resp = await client.post("/api/connect", json={"leagueId": 999, "seasonId": 2024})
    assert resp.status_code == 200
    await client.get("/api/teams/2024")
    assert espn.requests[-1].url.path.endswith("/seasons/2024/segments/0/leagues/999")


@pytest.mark.anyio
async def test_connect_rejects_malformed_body(client: AsyncClient, espn: FakeESPN):
    resp = await client.post("/api/connect", json={"leagueId": "abc", "seasonId": SEASON})
    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert body["category"] == "invalid_request"
    assert body["error"].startswith("Invalid connect request.")
    assert "leagueId" in body["error"]
    assert body["status"] is None
    assert espn.requests == []

    health = (await client.get("/api/health")).json()
    assert health["connected"] is False


@pytest.mark.anyio
async def test_connect_rejects_missing_field(client: AsyncClient):
    resp = await client.post("/api/connect", json={"leagueId": LEAGUE_ID})
    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert "seasonId" in body["error"]


@pytest.mark.anyio
async def test_read_rejects_non_integer_season(client: AsyncClient, espn: FakeESPN):
    await _connect(client)
    resp = await client.get("/api/teams/next-year")
    assert resp.status_code == 400
    body = resp.json()
    assert body["error"] == "Invalid request"
    assert body["category"] == "invalid_request"
    assert "season_id" in body["details"]
    assert body["timestamp"]
    assert espn.routes() == ["connect"]
