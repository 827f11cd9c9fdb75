from __future__ import annotations

from typing import List

from pydantic import Field

from draftassist.models import CamelModel, CanonicalPlayer


class DataQualityResponse(CamelModel):
    total_players: int
    players_with_real_adp: int = Field(alias="playersWithRealADP")
    players_with_real_projections: int
    average_adp: float = Field(alias="averageADP")
    average_projections: float


class SourceReportResponse(CamelModel):
    name: str
    origin: str
    status: str
    player_count: int
    added: int
    players_with_adp: int
    players_with_projections: int
    quality_score: List[int] = Field(default_factory=list)
    error: str | None = None


class PlayerQualityResponse(CamelModel):
    data_quality: DataQualityResponse
    sources: List[SourceReportResponse]
    top_players: List[CanonicalPlayer]


class ProbeEndpointResponse(CamelModel):
    name: str
    url: str
    status: str
    player_count: int = 0
    sample_player: str | None = None
    error: str | None = None


class SamplePlayerResponse(CamelModel):
    name: str | None = None
    position: str
    position_id: int | None = None
    team: str


class DebugResponse(CamelModel):
    endpoints: List[ProbeEndpointResponse] = Field(default_factory=list)
    total_players: int = 0
    position_breakdown: dict[str, int] = Field(default_factory=dict)
    sample_players: List[SamplePlayerResponse] = Field(default_factory=list)


class ErrorResponse(CamelModel):
    error: str
    category: str
    details: str | None = None
    timestamp: str
