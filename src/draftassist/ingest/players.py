"""Decode raw ESPN player payloads and emit canonical player records."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Iterable, List, Literal, Mapping, Optional, Sequence

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict

from draftassist.config import position_name, slot_names, team_abbreviation
from draftassist.errors import MalformedRecordError
from draftassist.models import UNKNOWN_ADP, CanonicalPlayer, DataSource


logger = logging.getLogger(__name__)

PROJECTED_STAT_SOURCE = 1


class _RawModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class AppliedStats(_RawModel):
    applied_total: Optional[float] = None


class PlayerStat(_RawModel):
    season_id: Optional[int] = None
    stat_source_id: Optional[int] = None
    scoring_period_id: Optional[int] = None
    applied_total: Optional[float] = None


class PlayerOwnership(_RawModel):
    average_draft_position: Optional[float] = None
    percent_owned: Optional[float] = None
    percent_started: Optional[float] = None


class RawPlayer(_RawModel):
    """The subset of an ESPN player object the proxy understands."""

    id: Optional[int] = None
    full_name: Optional[str] = None
    pro_team_abbreviation: Optional[str] = None
    pro_team_id: Optional[int] = None
    default_position: Optional[str] = None
    default_position_id: Optional[int] = None
    average_draft_position: Optional[float] = None
    percent_owned: Optional[float] = None
    percent_started: Optional[float] = None
    ownership: Optional[PlayerOwnership] = None
    projected_raw_stats: Optional[AppliedStats] = None
    stats: List[PlayerStat] = Field(default_factory=list)
    eligible_positions: Optional[List[str]] = None
    eligible_slots: Optional[List[int]] = None
    availability_status: Optional[str] = None
    is_droppable: Optional[bool] = None
    droppable: Optional[bool] = None
    is_injured: Optional[bool] = None
    injured: Optional[bool] = None
    injury_status: Optional[str] = None
    jersey_number: Optional[str] = None

    @field_validator("jersey_number", mode="before")
    @classmethod
    def _jersey_as_text(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(int(value))
        return value

    @field_validator("stats", mode="before")
    @classmethod
    def _stats_list(cls, value: Any) -> Any:
        return [] if value is None else value


class PlayerEntry(_RawModel):
    """One upstream player, either bare or wrapped with sibling fields."""

    shape: Literal["wrapped", "bare"] = "wrapped"
    id: Optional[int] = None
    player: RawPlayer
    projected_raw_stats: Optional[AppliedStats] = None
    status: Optional[str] = None
    on_team_id: Optional[int] = None
    data_source: DataSource = "primary"

    @property
    def player_id(self) -> int | None:
        return self.player.id if self.player.id is not None else self.id


def decode_entry(raw: Any) -> PlayerEntry | None:
    """Decode one upstream record into a :class:`PlayerEntry`.

    Returns ``None`` for anything that is not an object or fails validation.
    """

    if isinstance(raw, PlayerEntry):
        return raw
    if not isinstance(raw, Mapping):
        return None
    try:
        if isinstance(raw.get("player"), Mapping):
            return PlayerEntry.model_validate({**raw, "shape": "wrapped"})
        return PlayerEntry(shape="bare", player=RawPlayer.model_validate(raw))
    except ValidationError as exc:
        logger.debug("Skipping undecodable player record: %s", exc.errors()[:1])
        return None


def decode_entries(raw_records: Iterable[Any]) -> List[PlayerEntry]:
    entries: List[PlayerEntry] = []
    for raw in raw_records:
        entry = decode_entry(raw)
        if entry is not None:
            entries.append(entry)
    return entries


def _first_set(*values: Any, default: Any = None) -> Any:
    # Zero, empty strings and empty lists count as missing.
    for value in values:
        if value:
            return value
    return default


def projected_points(entry: PlayerEntry, season_id: int) -> float:
    player = entry.player
    if entry.projected_raw_stats and entry.projected_raw_stats.applied_total:
        return entry.projected_raw_stats.applied_total
    if player.projected_raw_stats and player.projected_raw_stats.applied_total:
        return player.projected_raw_stats.applied_total
    match = next(
        (
            stat
            for stat in player.stats
            if stat.season_id == season_id and stat.stat_source_id == PROJECTED_STAT_SOURCE
        ),
        None,
    )
    if match is not None and match.applied_total:
        return match.applied_total
    return 0.0


def _eligible_positions(player: RawPlayer) -> List[str]:
    if player.eligible_positions:
        return list(player.eligible_positions)
    if player.eligible_slots:
        names = slot_names(player.eligible_slots)
        if names:
            return names
    return [position_name(player.default_position_id)]


def _flag(*values: Optional[bool], default: bool) -> bool:
    for value in values:
        if value is not None:
            return value
    return default


def _require_identity(entry: PlayerEntry) -> tuple[int, str]:
    name = entry.player.full_name
    if not name or not name.strip():
        raise MalformedRecordError("player record has no fullName")
    player_id = entry.player_id
    if player_id is None:
        raise MalformedRecordError(f"player record {name!r} has no id")
    return player_id, name


def normalize_entry(
    entry: PlayerEntry,
    season_id: int,
    *,
    data_source: DataSource | None = None,
) -> CanonicalPlayer:
    """Build a :class:`CanonicalPlayer`; raises MalformedRecordError when unusable."""

    player_id, name = _require_identity(entry)
    player = entry.player
    ownership = player.ownership or PlayerOwnership()

    adp = _first_set(player.average_draft_position, ownership.average_draft_position, default=UNKNOWN_ADP)
    percent_owned = _first_set(player.percent_owned, ownership.percent_owned, default=0.0)
    percent_started = _first_set(player.percent_started, ownership.percent_started, default=0.0)
    projected = max(0.0, projected_points(entry, season_id))

    return CanonicalPlayer(
        id=player_id,
        name=name,
        team=player.pro_team_abbreviation or team_abbreviation(player.pro_team_id),
        position=player.default_position or position_name(player.default_position_id),
        position_code=player.default_position_id,
        projected_points=projected,
        ownership=percent_owned,
        average_draft_position=adp,
        percent_started=percent_started,
        eligible_positions=_eligible_positions(player),
        availability_status=player.availability_status or entry.status or "FREEAGENT",
        is_droppable=_flag(player.is_droppable, player.droppable, default=True),
        is_injured=_flag(player.is_injured, player.injured, default=False),
        injury_status=player.injury_status or "ACTIVE",
        jersey_number=player.jersey_number,
        on_team_id=entry.on_team_id,
        data_source=data_source or entry.data_source,
    )


def normalize_player(
    raw: Mapping[str, Any] | PlayerEntry,
    season_id: int,
    *,
    data_source: DataSource | None = None,
) -> CanonicalPlayer | None:
    """Normalize one raw record, returning ``None`` when it cannot be used."""

    entry = decode_entry(raw)
    if entry is None:
        return None
    try:
        return normalize_entry(entry, season_id, data_source=data_source)
    except MalformedRecordError as exc:
        logger.debug("Excluding player record: %s", exc)
        return None
    except ValidationError as exc:
        logger.debug("Excluding player record %s: %s", entry.player_id, exc.errors()[:1])
        return None


def normalize_players(
    entries: Sequence[Mapping[str, Any] | PlayerEntry],
    season_id: int,
) -> List[CanonicalPlayer]:
    players: List[CanonicalPlayer] = []
    for raw in entries:
        player = normalize_player(raw, season_id)
        if player is not None:
            players.append(player)
    return players


def position_breakdown(entries: Iterable[PlayerEntry]) -> dict[str, int]:
    """Count entries per default position name."""

    counts: Counter[str] = Counter(
        position_name(entry.player.default_position_id) for entry in entries
    )
    return dict(counts)


__all__ = [
    "AppliedStats",
    "PlayerEntry",
    "PlayerOwnership",
    "PlayerStat",
    "RawPlayer",
    "decode_entries",
    "decode_entry",
    "normalize_entry",
    "normalize_player",
    "normalize_players",
    "position_breakdown",
    "projected_points",
]
