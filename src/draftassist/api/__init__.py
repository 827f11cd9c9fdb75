"""REST API for the draft assistant front end."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from draftassist.api.schemas import (
    ConnectErrorResponse,
    ConnectRequest,
    ConnectResponse,
    DataQualityResponse,
    DebugResponse,
    ErrorResponse,
    HealthResponse,
    PlayerQualityResponse,
    ProbeEndpointResponse,
    SamplePlayerResponse,
    SourceReportResponse,
)
from draftassist.config import position_name, team_abbreviation
from draftassist.config_loader import ProxySettings
from draftassist.errors import DraftAssistError, UpstreamError
from draftassist.ingest import flatten_draft, flatten_teams, position_breakdown, summarize_league
from draftassist.ingest.players import PlayerEntry
from draftassist.models import CanonicalPlayer, DraftInfo, TeamSummary
from draftassist.pool import (
    PlayerPool,
    SourceReport,
    collect_player_pool,
    export_players_to_csv,
    pool_options,
    summarize_quality,
)
from draftassist.pool.sources import PUBLIC_PLAYER_LIST, fetch_source_entries
from draftassist.session import Credential, LeagueContext, LeagueSession
from draftassist.upstream import UpstreamClient, league_path


logger = logging.getLogger(__name__)

CONNECT_VIEWS = ("mSettings", "mTeam", "mRoster")
TEAM_VIEWS = ("mTeam", "mRoster")
DRAFT_VIEWS = ("mDraftDetail",)
PROBE_LIMIT = 50
PROBE_TIMEOUT = 10.0
TOP_PLAYERS = 10
INVALID_REQUEST = "invalid_request"


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _error_response(status_code: int, message: str, exc: DraftAssistError) -> JSONResponse:
    payload = ErrorResponse(
        error=message,
        category=exc.category,
        details=exc.message,
        timestamp=_timestamp(),
    )
    return JSONResponse(status_code=status_code, content=payload.model_dump(by_alias=True))


def _validation_summary(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts)


def _source_report(report: SourceReport) -> SourceReportResponse:
    return SourceReportResponse(
        name=report.name,
        origin=report.origin,
        status=report.status,
        player_count=report.player_count,
        added=report.added,
        players_with_adp=report.players_with_adp,
        players_with_projections=report.players_with_projections,
        quality_score=list(report.quality_score),
        error=report.error,
    )


def _sample_player(entry: PlayerEntry) -> SamplePlayerResponse:
    player = entry.player
    return SamplePlayerResponse(
        name=player.full_name,
        position=position_name(player.default_position_id),
        position_id=player.default_position_id,
        team=team_abbreviation(player.pro_team_id),
    )


def require_context(request: Request) -> LeagueContext:
    session: LeagueSession = request.app.state.session
    return session.require()


def create_app(
    settings: ProxySettings | None = None,
    *,
    upstream: UpstreamClient | None = None,
) -> FastAPI:
    settings = settings or ProxySettings.from_env()
    client = upstream or UpstreamClient.from_settings(settings)

    app = FastAPI(title="draftassist proxy")
    app.state.settings = settings
    app.state.session = LeagueSession()
    app.state.upstream = client

    @app.exception_handler(DraftAssistError)
    async def handle_draftassist_error(request: Request, exc: DraftAssistError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return _error_response(exc.status_code, exc.summary or exc.message, exc)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        summary = _validation_summary(exc)
        logger.warning("%s %s rejected: %s", request.method, request.url.path, summary)
        if request.url.path == "/api/connect":
            body = ConnectErrorResponse(error=f"Invalid connect request. {summary}", category=INVALID_REQUEST)
            return JSONResponse(status_code=400, content=body.model_dump(by_alias=True))
        payload = ErrorResponse(
            error="Invalid request",
            category=INVALID_REQUEST,
            details=summary,
            timestamp=_timestamp(),
        )
        return JSONResponse(status_code=400, content=payload.model_dump(by_alias=True))

    async def _player_pool(context: LeagueContext, season_id: int) -> PlayerPool:
        return await collect_player_pool(client, context, season_id, **pool_options(settings))

    @app.get("/api/health", response_model=HealthResponse)
    async def health(request: Request) -> HealthResponse:
        context = request.app.state.session.context
        return HealthResponse(
            status="ok",
            connected=context is not None,
            league=context.league_id if context is not None else "Not connected",
            api_url=settings.api_root,
        )

    @app.post(
        "/api/connect",
        response_model=ConnectResponse,
        responses={400: {"model": ConnectErrorResponse}, 500: {"model": ConnectErrorResponse}},
    )
    async def connect(payload: ConnectRequest, request: Request):
        context = LeagueContext(
            league_id=payload.league_id,
            season_id=payload.season_id,
            credential=Credential.from_tokens(payload.espn_s2, payload.swid),
        )
        logger.info("Connecting to ESPN League %s for season %s", context.league_id, context.season_id)
        try:
            data = await client.fetch(
                league_path(context.season_id, context.league_id),
                context,
                params={"view": ",".join(CONNECT_VIEWS)},
            )
        except UpstreamError as exc:
            message = exc.connect_message(payload.league_id)
            logger.error("ESPN connection error: %s", exc.message)
            body = ConnectErrorResponse(error=message, category=exc.category, status=exc.status)
            return JSONResponse(status_code=500, content=body.model_dump(by_alias=True))

        league = summarize_league(
            data if isinstance(data, dict) else {},
            league_id=context.league_id,
            season_id=context.season_id,
        )
        request.app.state.session.connect(context)
        logger.info("Connected to %s (%d teams)", league.name, league.teams)
        return ConnectResponse(success=True, league=league)

    @app.get("/api/players/{season_id}", response_model=list[CanonicalPlayer])
    async def list_players(season_id: int, context: LeagueContext = Depends(require_context)):
        pool = await _player_pool(context, season_id)
        quality = summarize_quality(pool.players)
        logger.info(
            "Returning %d players (%d with ADP, %d with projections)",
            quality.total_players,
            quality.players_with_real_adp,
            quality.players_with_real_projections,
        )
        return pool.players

    @app.get("/api/players/{season_id}/quality", response_model=PlayerQualityResponse)
    async def player_quality(season_id: int, context: LeagueContext = Depends(require_context)):
        pool = await _player_pool(context, season_id)
        quality = summarize_quality(pool.players)
        return PlayerQualityResponse(
            data_quality=DataQualityResponse(
                total_players=quality.total_players,
                players_with_real_adp=quality.players_with_real_adp,
                players_with_real_projections=quality.players_with_real_projections,
                average_adp=quality.average_adp,
                average_projections=quality.average_projections,
            ),
            sources=[_source_report(report) for report in pool.sources],
            top_players=pool.players[:TOP_PLAYERS],
        )

    @app.get("/api/players/{season_id}/export.csv")
    async def export_players(season_id: int, context: LeagueContext = Depends(require_context)):
        pool = await _player_pool(context, season_id)
        return Response(
            content=export_players_to_csv(pool.players),
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="players-{season_id}.csv"'},
        )

    @app.get("/api/teams/{season_id}", response_model=list[TeamSummary])
    async def list_teams(season_id: int, context: LeagueContext = Depends(require_context)):
        try:
            data = await client.fetch(
                league_path(season_id, context.league_id),
                context,
                params={"view": ",".join(TEAM_VIEWS)},
            )
        except UpstreamError as exc:
            return _error_response(500, "Failed to fetch teams", exc)
        return flatten_teams(data if isinstance(data, dict) else {})

    @app.get("/api/draft/{season_id}", response_model=DraftInfo)
    async def draft_info(season_id: int, context: LeagueContext = Depends(require_context)):
        try:
            data = await client.fetch(
                league_path(season_id, context.league_id),
                context,
                params={"view": ",".join(DRAFT_VIEWS)},
            )
        except UpstreamError as exc:
            return _error_response(500, "Failed to fetch draft information", exc)
        return flatten_draft(data if isinstance(data, dict) else {})

    @app.get("/api/debug/{season_id}", response_model=DebugResponse)
    async def debug_sources(season_id: int, request: Request) -> DebugResponse:
        context = request.app.state.session.context or LeagueContext(league_id=0, season_id=season_id)
        source = PUBLIC_PLAYER_LIST
        url = f"{settings.api_root}{source.path(context, season_id)}"
        report = DebugResponse()
        try:
            entries = await fetch_source_entries(
                client, source, context, season_id, limit=PROBE_LIMIT, timeout=PROBE_TIMEOUT
            )
        except UpstreamError as exc:
            report.endpoints.append(
                ProbeEndpointResponse(name=source.name, url=url, status="FAILED", error=exc.message)
            )
            return report

        report.endpoints.append(
            ProbeEndpointResponse(
                name=source.name,
                url=url,
                status="SUCCESS",
                player_count=len(entries),
                sample_player=entries[0].player.full_name if entries else None,
            )
        )
        report.total_players = len(entries)
        report.position_breakdown = position_breakdown(entries)
        report.sample_players = [_sample_player(entry) for entry in entries[:5]]
        return report

    return app


__all__ = ["create_app", "require_context"]
