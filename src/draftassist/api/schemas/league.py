from __future__ import annotations

from draftassist.models.base import CamelModel
from draftassist.models.league import LeagueSummary


class ConnectRequest(CamelModel):
    league_id: int
    season_id: int
    espn_s2: str | None = None
    swid: str | None = None


class ConnectResponse(CamelModel):
    success: bool = True
    league: LeagueSummary


class ConnectErrorResponse(CamelModel):
    success: bool = False
    error: str
    category: str
    status: int | None = None


class HealthResponse(CamelModel):
    status: str = "ok"
    connected: bool
    league: int | str
    api_url: str
