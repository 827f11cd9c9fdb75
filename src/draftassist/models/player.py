"""Canonical player model shared by the normalizer, ranker and API layers."""

from __future__ import annotations

from typing import List, Literal

from pydantic import Field, computed_field
from pydantic.config import ConfigDict

from .base import CamelModel


Tier = Literal["elite", "starter", "depth", "popular", "sleeper"]
DataSource = Literal["primary", "fallback"]

UNKNOWN_ADP = 999.0
REAL_ADP_CEILING = 500.0

# Inclusive upper bounds, checked in order.
TIER_THRESHOLDS: tuple[tuple[float, Tier], ...] = (
    (24, "elite"),
    (60, "starter"),
    (120, "depth"),
    (180, "popular"),
)


def tier_for_adp(adp: float) -> Tier:
    for ceiling, tier in TIER_THRESHOLDS:
        if adp <= ceiling:
            return tier
    return "sleeper"


class CanonicalPlayer(CamelModel):
    """Flattened ESPN player used by the draft assistant UI."""

    id: int
    name: str = Field(..., min_length=1)
    team: str
    position: str
    position_code: int | None = Field(default=None, alias="positionId")
    projected_points: float = Field(default=0.0, ge=0.0)
    ownership: float = 0.0
    average_draft_position: float = Field(default=UNKNOWN_ADP, alias="adp")
    percent_started: float = 0.0
    eligible_positions: List[str] = Field(default_factory=list)
    availability_status: str = "FREEAGENT"
    is_droppable: bool = True
    is_injured: bool = False
    injury_status: str = "ACTIVE"
    jersey_number: str | None = None
    on_team_id: int | None = None
    data_source: DataSource = "primary"

    model_config = ConfigDict(frozen=True)

    @computed_field(alias="tier")  # type: ignore[prop-decorator]
    @property
    def tier(self) -> Tier:
        return tier_for_adp(self.average_draft_position)

    @computed_field(alias="hasRealADP")  # type: ignore[prop-decorator]
    @property
    def has_real_adp(self) -> bool:
        return 0 < self.average_draft_position < REAL_ADP_CEILING

    @computed_field(alias="hasRealProjections")  # type: ignore[prop-decorator]
    @property
    def has_real_projections(self) -> bool:
        return self.projected_points > 0

    @property
    def is_rostered(self) -> bool:
        return self.availability_status == "ONTEAM" or bool(self.on_team_id)
