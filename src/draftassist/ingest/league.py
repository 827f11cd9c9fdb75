"""Flatten ESPN league, roster and draft payloads for the UI."""

from __future__ import annotations

from typing import Any, List, Mapping

from draftassist.models.league import (
    ConnectedTeam,
    DraftInfo,
    DraftPick,
    LeagueSummary,
    RosterEntry,
    TeamRecord,
    TeamSummary,
)
from draftassist.config import position_name, team_abbreviation


DEFAULT_LEAGUE_NAME = "ESPN League"
STANDARD_SCORING_TYPE = 0


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _items(value: Any) -> List[Mapping[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, Mapping)]


def _pool_player(entry: Mapping[str, Any]) -> Mapping[str, Any]:
    return _mapping(_mapping(entry.get("playerPoolEntry")).get("player"))


def team_display_name(team: Mapping[str, Any]) -> str:
    name = team.get("name")
    if isinstance(name, str) and name.strip():
        return name.strip()
    parts = [str(team.get(key) or "").strip() for key in ("location", "nickname")]
    return " ".join(part for part in parts if part) or f"Team {team.get('id', '?')}"


def scoring_type_label(settings: Mapping[str, Any]) -> str:
    scoring = _mapping(settings.get("scoringSettings"))
    return "Standard" if scoring.get("scoringType") == STANDARD_SCORING_TYPE else "PPR"


def summarize_league(payload: Mapping[str, Any], *, league_id: int, season_id: int) -> LeagueSummary:
    """Summary returned from a successful connect."""

    settings = _mapping(payload.get("settings"))
    teams = _items(payload.get("teams"))
    draft_date = _mapping(settings.get("draftSettings")).get("date")
    return LeagueSummary(
        name=settings.get("name") or DEFAULT_LEAGUE_NAME,
        teams=len(teams),
        scoring_type=scoring_type_label(settings),
        season_id=season_id,
        league_id=league_id,
        draft_date=draft_date if isinstance(draft_date, int) else None,
        team_data=[
            ConnectedTeam(
                id=team.get("id"),
                name=team_display_name(team),
                owner=team.get("primaryOwner"),
                roster=_items(_mapping(team.get("roster")).get("entries")),
            )
            for team in teams
        ],
    )


def flatten_roster(team: Mapping[str, Any]) -> List[RosterEntry]:
    entries = _items(_mapping(team.get("roster")).get("entries"))
    return [
        RosterEntry(
            player_id=entry.get("playerId"),
            player_name=_pool_player(entry).get("fullName") or "Unknown",
            position=position_name(_pool_player(entry).get("defaultPositionId")),
            lineup_slot_id=entry.get("lineupSlotId"),
        )
        for entry in entries
    ]


def flatten_teams(payload: Mapping[str, Any]) -> List[TeamSummary]:
    teams: List[TeamSummary] = []
    for team in _items(payload.get("teams")):
        overall = _mapping(_mapping(team.get("record")).get("overall"))
        teams.append(
            TeamSummary(
                id=team.get("id"),
                name=team_display_name(team),
                owner=team.get("primaryOwner"),
                record=TeamRecord.model_validate(overall) if overall else TeamRecord(),
                roster=flatten_roster(team),
            )
        )
    return teams


def flatten_draft(payload: Mapping[str, Any]) -> DraftInfo:
    detail = _mapping(payload.get("draftDetail"))
    picks: List[DraftPick] = []
    for pick in _items(detail.get("picks")):
        player = _pool_player(pick)
        picks.append(
            DraftPick(
                player_id=pick.get("playerId"),
                team_id=pick.get("teamId"),
                round_id=pick.get("roundId"),
                round_pick_number=pick.get("roundPickNumber"),
                overall_pick_number=pick.get("overallPickNumber"),
                player_name=player.get("fullName") or "Unknown",
                position=position_name(player.get("defaultPositionId")),
                team=team_abbreviation(player.get("proTeamId")),
            )
        )
    return DraftInfo(drafted=bool(detail.get("drafted", False)), picks=picks)


__all__ = [
    "flatten_draft",
    "flatten_roster",
    "flatten_teams",
    "scoring_type_label",
    "summarize_league",
    "team_display_name",
]
