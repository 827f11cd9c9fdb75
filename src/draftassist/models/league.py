"""Flattened league, roster and draft views returned to the UI."""

from __future__ import annotations

from typing import Any, List

from pydantic import Field
from pydantic.config import ConfigDict

from .base import CamelModel


class ConnectedTeam(CamelModel):
    id: int | None = None
    name: str
    owner: str | None = None
    roster: List[dict[str, Any]] = Field(default_factory=list)


class LeagueSummary(CamelModel):
    name: str
    teams: int
    scoring_type: str
    season_id: int
    league_id: int
    draft_date: int | None = None
    team_data: List[ConnectedTeam] = Field(default_factory=list)


class TeamRecord(CamelModel):
    wins: int = 0
    losses: int = 0
    ties: int = 0

    model_config = ConfigDict(extra="allow")


class RosterEntry(CamelModel):
    player_id: int | None = None
    player_name: str = "Unknown"
    position: str
    lineup_slot_id: int | None = None


class TeamSummary(CamelModel):
    id: int | None = None
    name: str
    owner: str | None = None
    record: TeamRecord = Field(default_factory=TeamRecord)
    roster: List[RosterEntry] = Field(default_factory=list)


class DraftPick(CamelModel):
    player_id: int | None = None
    team_id: int | None = None
    round_id: int | None = None
    round_pick_number: int | None = None
    overall_pick_number: int | None = None
    player_name: str = "Unknown"
    position: str
    team: str


class DraftInfo(CamelModel):
    drafted: bool = False
    picks: List[DraftPick] = Field(default_factory=list)
